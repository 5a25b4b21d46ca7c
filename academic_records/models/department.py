from ..extensions import db


class Department(db.Model):
    __tablename__ = "department"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), unique=True, nullable=False)
    description = db.Column(db.String(255))

    students = db.relationship("Student", back_populates="department")
    teachers = db.relationship("Teacher", back_populates="department")
    courses = db.relationship("Course", back_populates="department")

    def to_dict(self):
        return {"id": self.id, "name": self.name, "description": self.description}
