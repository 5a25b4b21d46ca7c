from ..extensions import db
from .enrollment import enrollment


class Student(db.Model):
    __tablename__ = "student"
    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey("account.id"), unique=True, nullable=False)
    first_name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64), nullable=False)
    student_code = db.Column(db.String(32), unique=True, nullable=False)
    phone = db.Column(db.String(32))
    address = db.Column(db.String(255))
    department_id = db.Column(db.Integer, db.ForeignKey("department.id"))

    account = db.relationship("Account", back_populates="student")
    department = db.relationship("Department", back_populates="students")
    courses = db.relationship(
        "Course", secondary=enrollment, back_populates="students", order_by="Course.id"
    )

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def to_dict(self, with_courses=False):
        data = {
            "id": self.id,
            "account_id": self.account_id,
            "username": self.account.username if self.account else None,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "student_code": self.student_code,
            "phone": self.phone,
            "address": self.address,
            "department_id": self.department_id,
        }
        if with_courses:
            data["courses"] = [c.code for c in self.courses]
        return data


class Teacher(db.Model):
    __tablename__ = "teacher"
    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey("account.id"), unique=True, nullable=False)
    first_name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64), nullable=False)
    employee_code = db.Column(db.String(32), unique=True, nullable=False)
    phone = db.Column(db.String(32))
    address = db.Column(db.String(255))
    specialization = db.Column(db.String(128))
    department_id = db.Column(db.Integer, db.ForeignKey("department.id"))

    account = db.relationship("Account", back_populates="teacher")
    department = db.relationship("Department", back_populates="teachers")
    courses = db.relationship("Course", back_populates="teacher")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def to_dict(self):
        return {
            "id": self.id,
            "account_id": self.account_id,
            "username": self.account.username if self.account else None,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "employee_code": self.employee_code,
            "phone": self.phone,
            "address": self.address,
            "specialization": self.specialization,
            "department_id": self.department_id,
        }
