import enum
import logging
from dataclasses import dataclass

from ..errors import Forbidden
from ..models import Role, Student, Teacher

log = logging.getLogger("academic_records.access")


class Action(str, enum.Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    ENROLL = "enroll"
    UNENROLL = "unenroll"


class Kind(str, enum.Enum):
    DEPARTMENT = "department"
    TEACHER = "teacher"
    STUDENT = "student"
    COURSE = "course"


class Scope(str, enum.Enum):
    ANY = "any"
    SELF = "self"


@dataclass(frozen=True)
class Identity:
    account_id: int
    role: Role

    @classmethod
    def of(cls, account):
        return cls(account_id=account.id, role=Role(account.role))


_CRUD = (Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE)

POLICY = {
    (Role.STUDENT, Action.READ, Kind.STUDENT): Scope.SELF,
    (Role.STUDENT, Action.UPDATE, Kind.STUDENT): Scope.SELF,
    (Role.STUDENT, Action.ENROLL, Kind.STUDENT): Scope.SELF,
    (Role.STUDENT, Action.UNENROLL, Kind.STUDENT): Scope.SELF,
    (Role.STUDENT, Action.READ, Kind.COURSE): Scope.ANY,
    (Role.STUDENT, Action.READ, Kind.DEPARTMENT): Scope.ANY,
}
POLICY.update({(Role.TEACHER, action, kind): Scope.ANY for action in _CRUD for kind in Kind})

_PROFILE_MODELS = {Kind.STUDENT: Student, Kind.TEACHER: Teacher}


def scope_for(role, action, kind):
    return POLICY.get((Role(role), Action(action), Kind(kind)))


def own_profile_id(identity, kind):
    model = _PROFILE_MODELS.get(Kind(kind))
    if model is None:
        return None
    profile = model.query.filter_by(account_id=identity.account_id).one_or_none()
    return profile.id if profile is not None else None


def is_allowed(identity, action, kind, target_id=None):
    scope = scope_for(identity.role, action, kind)
    if scope is Scope.ANY:
        return True
    if scope is Scope.SELF:
        return target_id is not None and own_profile_id(identity, kind) == target_id
    return False


def authorize(identity, action, kind, target_id=None):
    if not is_allowed(identity, action, kind, target_id):
        log.warning(
            "denied %s %s on %s %s for account %s",
            identity.role.value, Action(action).value, Kind(kind).value, target_id,
            identity.account_id,
        )
        raise Forbidden(f"{Action(action).value} on {Kind(kind).value} is not permitted")
