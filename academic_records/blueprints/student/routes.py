from flask import jsonify, request
from flask_login import login_required

from ...services import records
from ...services.access import Kind
from ..auth.routes import current_identity
from . import bp


def get_current_student(ident):
    return records.own_profile(ident, Kind.STUDENT)


@bp.get("/dashboard")
@login_required
def dashboard():
    ident = current_identity()
    stu = get_current_student(ident)
    mine = records.courses_of(ident, stu.id)
    return jsonify(
        student=stu.to_dict(),
        courses=[c.to_dict() for c in mine],
        all_courses=[c.to_dict() for c in records.list_all(ident, Kind.COURSE)],
    )


@bp.get("/profile")
@login_required
def profile():
    ident = current_identity()
    stu = get_current_student(ident)
    return jsonify(
        student=stu.to_dict(),
        departments=[d.to_dict() for d in records.list_all(ident, Kind.DEPARTMENT)],
    )


@bp.post("/profile/update")
@login_required
def update_profile():
    ident = current_identity()
    stu = get_current_student(ident)
    stu = records.update(ident, Kind.STUDENT, stu.id, request.form.to_dict())
    return jsonify(student=stu.to_dict())


@bp.get("/courses")
@login_required
def list_courses():
    ident = current_identity()
    stu = get_current_student(ident)
    enrolled = {c.id for c in records.courses_of(ident, stu.id)}
    items = []
    for c in records.list_all(ident, Kind.COURSE):
        item = c.to_dict()
        item["enrolled"] = c.id in enrolled
        items.append(item)
    return jsonify(courses=items)


@bp.post("/enroll/<int:course_id>")
@login_required
def enroll(course_id):
    ident = current_identity()
    stu = get_current_student(ident)
    stu = records.enroll(ident, stu.id, course_id)
    return jsonify(student=stu.to_dict(with_courses=True))


@bp.post("/unenroll/<int:course_id>")
@login_required
def unenroll(course_id):
    ident = current_identity()
    stu = get_current_student(ident)
    stu = records.unenroll(ident, stu.id, course_id)
    return jsonify(student=stu.to_dict(with_courses=True))
