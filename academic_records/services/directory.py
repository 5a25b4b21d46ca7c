import logging

from ..errors import DuplicateKey, InvalidInput, NotFound
from ..extensions import db
from ..models import Account, Course, Department, Role, Student, Teacher
from . import identity
from .tx import atomic

log = logging.getLogger("academic_records.directory")

INT_FIELDS = ("credits", "department_id", "teacher_id", "account_id")


def _clean(fields):
    values = {}
    for key, value in (fields or {}).items():
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                value = None
        if key in INT_FIELDS and value is not None:
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise InvalidInput(f"{key} must be an integer") from None
        values[key] = value
    return values


class DirectoryService:
    model = None
    kind = None
    key_field = None
    required_fields = ()
    mutable_fields = ()
    references = {}

    def get_by_id(self, record_id):
        return db.session.get(self.model, record_id)

    def get_all(self):
        return self.model.query.order_by(self.model.id).all()

    def get_by_key(self, key):
        return self.model.query.filter_by(**{self.key_field: key}).one_or_none()

    def require(self, record_id):
        record = self.get_by_id(record_id)
        if record is None:
            raise NotFound(self.kind, record_id)
        return record

    def _check_required(self, values, fields):
        missing = [f for f in fields if values.get(f) is None]
        if missing:
            raise InvalidInput(f"{self.kind} requires {', '.join(missing)}")

    def _resolve_references(self, values):
        for field, model in self.references.items():
            ref_id = values.get(field)
            if ref_id is not None and db.session.get(model, ref_id) is None:
                raise NotFound(model.__name__, ref_id)

    def validate(self, values):
        pass

    def build(self, values):
        attrs = {f: values[f] for f in (self.key_field,) + self.mutable_fields if f in values}
        return self.model(**attrs)

    def create(self, fields):
        values = _clean(fields)
        self._check_required(values, (self.key_field,) + self.required_fields)
        self.validate(values)
        key = values[self.key_field]
        with atomic() as session:
            if self.get_by_key(key) is not None:
                raise DuplicateKey(self.key_field, key)
            self._resolve_references(values)
            record = self.build(values)
            session.add(record)
            session.flush()
        log.info("created %s %s (id=%s)", self.kind, key, record.id)
        return record

    def update(self, record_id, patch):
        values = _clean(patch)
        ignored = sorted(set(values) - set(self.mutable_fields))
        if ignored:
            log.debug("ignoring immutable fields %s on %s %s", ignored, self.kind, record_id)
        values = {k: v for k, v in values.items() if k in self.mutable_fields}
        self._check_required(values, [f for f in self.required_fields if f in values])
        self.validate(values)
        with atomic():
            record = self.require(record_id)
            self._resolve_references(values)
            for field, value in values.items():
                setattr(record, field, value)
        log.info("updated %s %s fields=%s", self.kind, record_id, sorted(values))
        return record

    def detach(self, record):
        pass

    def delete(self, record_id):
        with atomic() as session:
            record = self.require(record_id)
            self.detach(record)
            session.delete(record)
        log.info("deleted %s %s", self.kind, record_id)


class DepartmentMemberService(DirectoryService):
    references = {"department_id": Department}

    def get_by_department(self, department_id):
        return (self.model.query
                .filter_by(department_id=department_id)
                .order_by(self.model.id).all())


class ProfileService(DepartmentMemberService):
    """A student or teacher record bound 1:1 to an account of a fixed role."""

    role = None

    def get_by_account(self, account_id):
        return self.model.query.filter_by(account_id=account_id).one_or_none()

    def _account_for(self, values, fields):
        account_id = values.get("account_id")
        if account_id is None:
            return identity.create_account(
                values.get("username"), fields.get("password"), values.get("email"), self.role
            )
        account = db.session.get(Account, account_id)
        if account is None:
            raise NotFound("Account", account_id)
        if account.role != self.role:
            raise InvalidInput(f"A {account.role.value} account cannot own a {self.kind} profile")
        if account.student is not None or account.teacher is not None:
            raise DuplicateKey("account_id", account_id)
        return account

    def create(self, fields):
        values = _clean(fields)
        self._check_required(values, (self.key_field,) + self.required_fields)
        self.validate(values)
        key = values[self.key_field]
        with atomic() as session:
            if self.get_by_key(key) is not None:
                raise DuplicateKey(self.key_field, key)
            self._resolve_references(values)
            account = self._account_for(values, fields or {})
            record = self.build(values)
            record.account = account
            session.add(record)
            session.flush()
        log.info("created %s %s (id=%s, account=%s)", self.kind, key, record.id, account.username)
        return record

    def delete(self, record_id):
        with atomic() as session:
            record = self.require(record_id)
            account_id = record.account_id
            self.detach(record)
            identity.delete_account(account_id)
            session.delete(record)
        log.info("deleted %s %s with account id=%s", self.kind, record_id, account_id)


class DepartmentService(DirectoryService):
    model = Department
    kind = "Department"
    key_field = "name"
    mutable_fields = ("description",)

    def detach(self, record):
        # Members outlive the department; only the reference is cleared.
        members = list(record.students) + list(record.teachers) + list(record.courses)
        for member in members:
            member.department = None
        if members:
            log.info("detached %d records from department %s", len(members), record.name)


class TeacherService(ProfileService):
    model = Teacher
    kind = "Teacher"
    role = Role.TEACHER
    key_field = "employee_code"
    required_fields = ("first_name", "last_name")
    mutable_fields = (
        "first_name", "last_name", "phone", "address", "specialization", "department_id",
    )

    def detach(self, record):
        for course in list(record.courses):
            course.teacher = None


class StudentService(ProfileService):
    model = Student
    kind = "Student"
    role = Role.STUDENT
    key_field = "student_code"
    required_fields = ("first_name", "last_name")
    mutable_fields = ("first_name", "last_name", "phone", "address", "department_id")

    def detach(self, record):
        record.courses.clear()


class CourseService(DepartmentMemberService):
    model = Course
    kind = "Course"
    key_field = "code"
    required_fields = ("name",)
    mutable_fields = ("name", "description", "credits", "department_id", "teacher_id")
    references = {"department_id": Department, "teacher_id": Teacher}

    def validate(self, values):
        credits = values.get("credits")
        if credits is not None and credits < 0:
            raise InvalidInput("Credits must not be negative")

    def get_by_teacher(self, teacher_id):
        return Course.query.filter_by(teacher_id=teacher_id).order_by(Course.id).all()

    def detach(self, record):
        record.students.clear()


departments = DepartmentService()
teachers = TeacherService()
students = StudentService()
courses = CourseService()
