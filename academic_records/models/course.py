from ..extensions import db
from .enrollment import enrollment


class Course(db.Model):
    __tablename__ = "course"
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(32), unique=True, nullable=False)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.String(1000))
    credits = db.Column(db.Integer)
    department_id = db.Column(db.Integer, db.ForeignKey("department.id"))
    teacher_id = db.Column(db.Integer, db.ForeignKey("teacher.id"))

    department = db.relationship("Department", back_populates="courses")
    teacher = db.relationship("Teacher", back_populates="courses")
    students = db.relationship(
        "Student", secondary=enrollment, back_populates="courses", order_by="Student.id"
    )

    def to_dict(self, with_students=False):
        data = {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "credits": self.credits,
            "department_id": self.department_id,
            "teacher_id": self.teacher_id,
        }
        if with_students:
            data["students"] = [s.student_code for s in self.students]
        return data
