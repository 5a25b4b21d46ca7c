from ..extensions import db
from .account import Account, Role
from .department import Department
from .people import Student, Teacher
from .course import Course
from .enrollment import enrollment

__all__ = [
    "Account", "Role", "Department", "Student", "Teacher", "Course", "enrollment",
]
