import pytest

from academic_records import create_app
from academic_records.extensions import db
from academic_records.services.access import Identity
from academic_records.services.directory import courses, departments, students, teachers

PASSWORD = "secret123"


@pytest.fixture
def app():
    app = create_app("config.TestConfig")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_department(app):
    def _make(name="CSE", description="Computer Science and Engineering"):
        return departments.create({"name": name, "description": description})
    return _make


@pytest.fixture
def make_teacher(app):
    def _make(code="T1", department=None, **extra):
        fields = {
            "username": extra.pop("username", code.lower()),
            "password": PASSWORD,
            "email": extra.pop("email", f"{code.lower()}@example.com"),
            "first_name": "Tess",
            "last_name": "Teacher",
            "employee_code": code,
            "department_id": department.id if department else None,
        }
        fields.update(extra)
        return teachers.create(fields)
    return _make


@pytest.fixture
def make_student(app):
    def _make(code="S1", department=None, **extra):
        fields = {
            "username": extra.pop("username", code.lower()),
            "password": PASSWORD,
            "email": extra.pop("email", f"{code.lower()}@example.com"),
            "first_name": "Sam",
            "last_name": "Student",
            "student_code": code,
            "department_id": department.id if department else None,
        }
        fields.update(extra)
        return students.create(fields)
    return _make


@pytest.fixture
def make_course(app):
    def _make(code="CSE101", department=None, teacher=None, **extra):
        fields = {
            "code": code,
            "name": extra.pop("name", f"Course {code}"),
            "credits": 3,
            "department_id": department.id if department else None,
            "teacher_id": teacher.id if teacher else None,
        }
        fields.update(extra)
        return courses.create(fields)
    return _make


@pytest.fixture
def identity_of():
    def _identity(profile):
        return Identity.of(profile.account)
    return _identity


@pytest.fixture
def login(client):
    def _login(username, password=PASSWORD):
        return client.post("/auth/login", data={"username": username, "password": password})
    return _login
