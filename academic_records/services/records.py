from ..errors import Forbidden, InvalidInput, NotFound
from ..models import Role
from . import enrollment
from . import identity as accounts
from .access import Action, Kind, authorize, own_profile_id
from .directory import courses, departments, students, teachers

SERVICES = {
    Kind.DEPARTMENT: departments,
    Kind.TEACHER: teachers,
    Kind.STUDENT: students,
    Kind.COURSE: courses,
}


def _service(kind):
    return SERVICES[Kind(kind)]


def create(identity, kind, fields):
    authorize(identity, Action.CREATE, kind)
    return _service(kind).create(fields)


def get(identity, kind, record_id):
    authorize(identity, Action.READ, kind, record_id)
    return _service(kind).require(record_id)


def list_all(identity, kind):
    authorize(identity, Action.READ, kind)
    return _service(kind).get_all()


def list_by_department(identity, kind, department_id):
    authorize(identity, Action.READ, kind)
    service = _service(kind)
    if not hasattr(service, "get_by_department"):
        raise InvalidInput(f"{service.kind} records are not grouped by department")
    departments.require(department_id)
    return service.get_by_department(department_id)


def update(identity, kind, record_id, patch):
    authorize(identity, Action.UPDATE, kind, record_id)
    return _service(kind).update(record_id, patch)


def delete(identity, kind, record_id):
    authorize(identity, Action.DELETE, kind, record_id)
    _service(kind).delete(record_id)


def enroll(identity, student_id, course_id):
    authorize(identity, Action.ENROLL, Kind.STUDENT, student_id)
    return enrollment.enroll(student_id, course_id)


def unenroll(identity, student_id, course_id):
    authorize(identity, Action.UNENROLL, Kind.STUDENT, student_id)
    return enrollment.unenroll(student_id, course_id)


def courses_of(identity, student_id):
    authorize(identity, Action.READ, Kind.STUDENT, student_id)
    return enrollment.courses_of(student_id)


def students_of(identity, course_id):
    authorize(identity, Action.READ, Kind.STUDENT)
    return enrollment.students_of(course_id)


def own_profile(identity, kind):
    """The caller's own student or teacher record."""
    if identity.role.value != Kind(kind).name:
        raise Forbidden(f"A {identity.role.value} account has no {Kind(kind).value} profile")
    profile_id = own_profile_id(identity, kind)
    if profile_id is None:
        raise NotFound(Kind(kind).value.capitalize(), f"for account {identity.account_id}")
    return _service(kind).require(profile_id)


def set_account_enabled(identity, account_id, enabled):
    """Enable or disable login for the account behind a profile.

    Allowed to whoever may delete that profile.
    """
    account = accounts.get_by_id(account_id)
    if account is None:
        raise NotFound("Account", account_id)
    kind = Kind.STUDENT if account.role == Role.STUDENT else Kind.TEACHER
    profile = account.student if kind is Kind.STUDENT else account.teacher
    authorize(identity, Action.DELETE, kind, profile.id if profile else None)
    return accounts.set_enabled(account_id, enabled)
