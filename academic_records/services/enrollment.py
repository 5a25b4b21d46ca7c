import logging

from sqlalchemy import delete, insert, select

from ..extensions import db
from ..models import Course, Student, enrollment
from .directory import courses, students
from .tx import atomic

log = logging.getLogger("academic_records.enrollment")


def is_enrolled(student_id, course_id):
    row = db.session.execute(
        select(enrollment.c.student_id).where(
            enrollment.c.student_id == student_id,
            enrollment.c.course_id == course_id,
        )
    ).first()
    return row is not None


def courses_of(student_id):
    students.require(student_id)
    return (Course.query
            .join(enrollment, enrollment.c.course_id == Course.id)
            .filter(enrollment.c.student_id == student_id)
            .order_by(Course.id).all())


def students_of(course_id):
    courses.require(course_id)
    return (Student.query
            .join(enrollment, enrollment.c.student_id == Student.id)
            .filter(enrollment.c.course_id == course_id)
            .order_by(Student.id).all())


def enroll(student_id, course_id):
    """Put the student on the course; enrolling twice changes nothing."""
    with atomic() as session:
        student = students.require(student_id)
        course = courses.require(course_id)
        if is_enrolled(student.id, course.id):
            log.debug("student %s already enrolled in %s", student.student_code, course.code)
            return student
        session.execute(insert(enrollment).values(student_id=student.id, course_id=course.id))
        # the relationship collections were loaded before the insert
        session.expire(student, ["courses"])
        session.expire(course, ["students"])
    log.info("enrolled student %s in %s", student.student_code, course.code)
    return student


def unenroll(student_id, course_id):
    """Take the student off the course; a missing enrollment is left as is."""
    with atomic() as session:
        student = students.require(student_id)
        course = courses.require(course_id)
        result = session.execute(
            delete(enrollment).where(
                enrollment.c.student_id == student.id,
                enrollment.c.course_id == course.id,
            )
        )
        session.expire(student, ["courses"])
        session.expire(course, ["students"])
    if result.rowcount:
        log.info("unenrolled student %s from %s", student.student_code, course.code)
    return student
