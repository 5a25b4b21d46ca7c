import click

from .extensions import db
from .models import Role
from .services import identity
from .services.directory import courses, departments, students, teachers
from .services.tx import atomic

DEMO_PASSWORD = "password123"

DEPARTMENTS = [
    ("Computer Science", "Department of Computer Science and Engineering"),
    ("Electrical Engineering", "Department of Electrical and Electronic Engineering"),
    ("Civil Engineering", "Department of Civil Engineering"),
]


def seed_demo_data():
    """Load the demo records once; returns False when data already exists."""
    if departments.get_all():
        return False
    with atomic():
        _create_demo_records()
    return True


def _create_demo_records():
    cse, eee, _civil = [departments.create({"name": n, "description": d}) for n, d in DEPARTMENTS]

    t1 = teachers.create({
        "username": "teacher1", "password": DEMO_PASSWORD, "email": "teacher@example.com",
        "first_name": "John", "last_name": "Doe", "employee_code": "T001",
        "department_id": cse.id, "phone": "123-456-7890",
        "specialization": "Software Engineering",
    })
    t2 = teachers.create({
        "username": "teacher2", "password": DEMO_PASSWORD, "email": "teacher2@example.com",
        "first_name": "Jane", "last_name": "Smith", "employee_code": "T002",
        "department_id": eee.id, "phone": "123-456-7891", "specialization": "Power Systems",
    })
    students.create({
        "username": "student1", "password": DEMO_PASSWORD, "email": "student@example.com",
        "first_name": "Alice", "last_name": "Johnson", "student_code": "S001",
        "department_id": cse.id, "phone": "987-654-3210", "address": "123 Main St",
    })
    students.create({
        "username": "student2", "password": DEMO_PASSWORD, "email": "student2@example.com",
        "first_name": "Bob", "last_name": "Williams", "student_code": "S002",
        "department_id": eee.id, "phone": "987-654-3211", "address": "456 Oak Ave",
    })

    courses.create({"code": "CSE101", "name": "Introduction to Programming",
                    "description": "Basic programming concepts", "credits": 3,
                    "department_id": cse.id, "teacher_id": t1.id})
    courses.create({"code": "CSE201", "name": "Data Structures",
                    "description": "Data structures and algorithms", "credits": 4,
                    "department_id": cse.id, "teacher_id": t1.id})
    courses.create({"code": "EEE101", "name": "Circuit Analysis",
                    "description": "Fundamentals of circuit theory", "credits": 3,
                    "department_id": eee.id, "teacher_id": t2.id})


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Tables created")

    @app.cli.command("seed")
    def seed():
        """Load demo departments, people and courses."""
        if not seed_demo_data():
            click.echo("Data already present, nothing seeded")
            return
        click.echo("Demo data loaded")
        for role in (Role.TEACHER, Role.STUDENT):
            username = f"{role.value.lower()}1"
            if identity.find_by_username(username) is not None:
                click.echo(f"  {role.value.title()} login: {username} / {DEMO_PASSWORD}")
