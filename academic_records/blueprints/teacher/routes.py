from flask import jsonify, request
from flask_login import login_required

from ...services import records
from ...services.access import Action, Kind, is_allowed
from ..auth.routes import current_identity
from . import bp


def get_current_teacher(ident):
    return records.own_profile(ident, Kind.TEACHER)


def _listing(kind, key):
    ident = current_identity()
    department_id = request.args.get("department_id", type=int)
    if department_id is not None:
        items = records.list_by_department(ident, kind, department_id)
    else:
        items = records.list_all(ident, kind)
    return jsonify({key: [i.to_dict() for i in items]})


def _created(kind, key):
    item = records.create(current_identity(), kind, request.form.to_dict())
    return jsonify({key: item.to_dict()}), 201


def _updated(kind, key, record_id):
    item = records.update(current_identity(), kind, record_id, request.form.to_dict())
    return jsonify({key: item.to_dict()})


def _deleted(kind, record_id):
    records.delete(current_identity(), kind, record_id)
    return jsonify(deleted=record_id)


@bp.get("/dashboard")
@login_required
def dashboard():
    ident = current_identity()
    t = get_current_teacher(ident)
    return jsonify(
        teacher=t.to_dict(),
        students=[s.to_dict() for s in records.list_all(ident, Kind.STUDENT)],
        teachers=[x.to_dict() for x in records.list_all(ident, Kind.TEACHER)],
        courses=[c.to_dict() for c in records.list_all(ident, Kind.COURSE)],
        departments=[d.to_dict() for d in records.list_all(ident, Kind.DEPARTMENT)],
    )


@bp.get("/profile")
@login_required
def profile():
    ident = current_identity()
    t = get_current_teacher(ident)
    return jsonify(
        teacher=t.to_dict(),
        courses=[c.to_dict() for c in t.courses],
        departments=[d.to_dict() for d in records.list_all(ident, Kind.DEPARTMENT)],
    )


@bp.post("/profile/update")
@login_required
def update_profile():
    ident = current_identity()
    t = get_current_teacher(ident)
    return _updated(Kind.TEACHER, "teacher", t.id)

# ---------- Students ----------
@bp.get("/students")
@login_required
def students():
    return _listing(Kind.STUDENT, "students")

@bp.post("/students")
@login_required
def create_student():
    return _created(Kind.STUDENT, "student")

@bp.get("/students/<int:sid>")
@login_required
def student_detail(sid):
    s = records.get(current_identity(), Kind.STUDENT, sid)
    return jsonify(student=s.to_dict(with_courses=True))

@bp.post("/students/<int:sid>/update")
@login_required
def update_student(sid):
    return _updated(Kind.STUDENT, "student", sid)

@bp.post("/students/<int:sid>/delete")
@login_required
def delete_student(sid):
    return _deleted(Kind.STUDENT, sid)

# ---------- Teachers ----------
@bp.get("/teachers")
@login_required
def teachers():
    return _listing(Kind.TEACHER, "teachers")

@bp.post("/teachers")
@login_required
def create_teacher():
    return _created(Kind.TEACHER, "teacher")

@bp.get("/teachers/<int:tid>")
@login_required
def teacher_detail(tid):
    t = records.get(current_identity(), Kind.TEACHER, tid)
    return jsonify(teacher=t.to_dict(), courses=[c.to_dict() for c in t.courses])

@bp.post("/teachers/<int:tid>/update")
@login_required
def update_teacher(tid):
    return _updated(Kind.TEACHER, "teacher", tid)

@bp.post("/teachers/<int:tid>/delete")
@login_required
def delete_teacher(tid):
    return _deleted(Kind.TEACHER, tid)

# ---------- Courses ----------
@bp.get("/courses")
@login_required
def courses():
    return _listing(Kind.COURSE, "courses")

@bp.post("/courses")
@login_required
def create_course():
    return _created(Kind.COURSE, "course")

@bp.get("/courses/<int:cid>")
@login_required
def course_detail(cid):
    ident = current_identity()
    c = records.get(ident, Kind.COURSE, cid)
    # roster only for callers who may read every student
    return jsonify(course=c.to_dict(with_students=is_allowed(ident, Action.READ, Kind.STUDENT)))

@bp.get("/courses/<int:cid>/students")
@login_required
def course_students(cid):
    items = records.students_of(current_identity(), cid)
    return jsonify(students=[s.to_dict() for s in items])

@bp.post("/courses/<int:cid>/update")
@login_required
def update_course(cid):
    return _updated(Kind.COURSE, "course", cid)

@bp.post("/courses/<int:cid>/delete")
@login_required
def delete_course(cid):
    return _deleted(Kind.COURSE, cid)

# ---------- Departments ----------
@bp.get("/departments")
@login_required
def departments():
    return _listing(Kind.DEPARTMENT, "departments")

@bp.post("/departments")
@login_required
def create_department():
    return _created(Kind.DEPARTMENT, "department")

@bp.get("/departments/<int:did>")
@login_required
def department_detail(did):
    d = records.get(current_identity(), Kind.DEPARTMENT, did)
    return jsonify(department=d.to_dict())

@bp.post("/departments/<int:did>/update")
@login_required
def update_department(did):
    return _updated(Kind.DEPARTMENT, "department", did)

@bp.post("/departments/<int:did>/delete")
@login_required
def delete_department(did):
    return _deleted(Kind.DEPARTMENT, did)

# ---------- Accounts ----------
@bp.post("/accounts/<int:aid>/enabled")
@login_required
def set_account_enabled(aid):
    enabled = request.form.get("enabled", "true").strip().lower() in ("1", "true", "yes", "on")
    account = records.set_account_enabled(current_identity(), aid, enabled)
    return jsonify(account=account.to_dict())
