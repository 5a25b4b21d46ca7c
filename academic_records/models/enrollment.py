from ..extensions import db

# One row per (student, course) pair; the composite key rejects duplicates.
enrollment = db.Table(
    "enrollment",
    db.Column("student_id", db.Integer, db.ForeignKey("student.id"), primary_key=True),
    db.Column("course_id", db.Integer, db.ForeignKey("course.id"), primary_key=True),
)
