from .access import Action, Identity, Kind
from .directory import courses, departments, students, teachers

__all__ = [
    "Action", "Identity", "Kind", "courses", "departments", "students", "teachers",
]
