"""
HTTP surface: login, the student area and the teacher management area.
"""
import pytest

from academic_records.extensions import db
from academic_records.services import enrollment, identity
from academic_records.services.directory import students


@pytest.fixture
def campus(make_department, make_teacher, make_student, make_course):
    cse = make_department("CSE")
    teacher = make_teacher("T1", department=cse, username="teacher1")
    student = make_student("S1", department=cse, username="student1")
    other = make_student("S2", department=cse, username="student2")
    course = make_course("CSE101", department=cse, teacher=teacher)
    return {"cse": cse, "teacher": teacher, "student": student, "other": other, "course": course}


def test_login_points_to_role_dashboard(client, campus, login):
    r = login("student1")
    assert r.status_code == 200
    assert r.get_json()["dashboard"] == "/student/dashboard"
    assert client.get("/auth/me").get_json()["account"]["role"] == "STUDENT"
    client.get("/auth/logout")
    r = login("teacher1")
    assert r.get_json()["dashboard"] == "/teacher/dashboard"


def test_bad_login_is_401(client, campus, login):
    r = login("student1", "wrong")
    assert r.status_code == 401
    assert r.get_json()["error"] == "InvalidCredentials"
    assert r.get_json()["message"] == "Incorrect username or password"


def test_pages_require_login(client, campus):
    assert client.get("/student/dashboard").status_code == 401
    assert client.get("/teacher/students").status_code == 401


def test_student_enrolls_through_the_web(client, campus, login):
    login("student1")
    cid = campus["course"].id
    assert client.post(f"/student/enroll/{cid}").status_code == 200
    r = client.post(f"/student/enroll/{cid}")
    assert r.get_json()["student"]["courses"] == ["CSE101"]

    dash = client.get("/student/dashboard").get_json()
    assert [c["code"] for c in dash["courses"]] == ["CSE101"]
    listed = client.get("/student/courses").get_json()["courses"]
    assert listed[0]["enrolled"] is True

    r = client.post(f"/student/unenroll/{cid}")
    assert r.get_json()["student"]["courses"] == []
    assert client.post("/student/enroll/999").status_code == 404


def test_student_profile_update_keeps_student_code(client, campus, login):
    login("student1")
    r = client.post("/student/profile/update", data={"phone": "555", "student_code": "NEW"})
    body = r.get_json()["student"]
    assert body["phone"] == "555"
    assert body["student_code"] == "S1"


def test_student_is_forbidden_in_teacher_area(client, campus, login):
    login("student1")
    assert client.get("/teacher/students").status_code == 403
    assert client.post(f"/teacher/students/{campus['other'].id}/update",
                       data={"phone": "1"}).status_code == 403
    assert client.get("/teacher/dashboard").status_code == 403


def test_teacher_is_forbidden_in_student_area(client, campus, login):
    login("teacher1")
    assert client.get("/student/dashboard").status_code == 403


def test_teacher_manages_departments(client, campus, login):
    login("teacher1")
    r = client.post("/teacher/departments", data={"name": "EEE", "description": "Electrical"})
    assert r.status_code == 201
    did = r.get_json()["department"]["id"]
    r = client.post("/teacher/departments", data={"name": "EEE"})
    assert r.status_code == 409
    assert r.get_json()["error"] == "DuplicateKey"
    r = client.post(f"/teacher/departments/{did}/update", data={"description": "EE"})
    assert r.get_json()["department"]["description"] == "EE"
    assert client.post(f"/teacher/departments/{did}/delete").status_code == 200
    assert client.get(f"/teacher/departments/{did}").status_code == 404


def test_teacher_creates_and_deletes_student(client, campus, login):
    login("teacher1")
    r = client.post("/teacher/students", data={
        "username": "newbie", "password": "password123", "email": "newbie@example.com",
        "first_name": "New", "last_name": "Bie", "student_code": "S3",
        "department_id": str(campus["cse"].id),
    })
    assert r.status_code == 201
    sid = r.get_json()["student"]["id"]

    listed = client.get(f"/teacher/students?department_id={campus['cse'].id}").get_json()
    assert "S3" in [s["student_code"] for s in listed["students"]]

    assert client.post(f"/teacher/students/{sid}/delete").status_code == 200
    db.session.expire_all()
    assert students.get_by_id(sid) is None
    assert identity.find_by_username("newbie") is None


def test_teacher_creates_course_and_sees_roster(client, campus, login):
    enrollment.enroll(campus["student"].id, campus["course"].id)
    login("teacher1")
    r = client.post("/teacher/courses", data={
        "code": "CSE201", "name": "Data Structures", "credits": "4",
        "teacher_id": str(campus["teacher"].id),
    })
    assert r.status_code == 201
    assert r.get_json()["course"]["credits"] == 4
    roster = client.get(f"/teacher/courses/{campus['course'].id}/students").get_json()
    assert [s["student_code"] for s in roster["students"]] == ["S1"]
    detail = client.get(f"/teacher/courses/{campus['course'].id}").get_json()
    assert detail["course"]["students"] == ["S1"]


def test_teacher_updates_own_profile(client, campus, login):
    login("teacher1")
    r = client.post("/teacher/profile/update",
                    data={"specialization": "Databases", "employee_code": "T999"})
    body = r.get_json()["teacher"]
    assert body["specialization"] == "Databases"
    assert body["employee_code"] == "T1"


def test_teacher_disables_student_account(client, campus, login):
    login("teacher1")
    r = client.post(f"/teacher/accounts/{campus['other'].account_id}/enabled",
                    data={"enabled": "false"})
    assert r.get_json()["account"]["enabled"] is False
    client.get("/auth/logout")
    assert login("student2").status_code == 401


def test_change_password(client, campus, login):
    login("student1")
    r = client.post("/auth/password", data={
        "old_password": "secret123", "new_password": "brandnew1", "confirm_password": "nope",
    })
    assert r.status_code == 400
    r = client.post("/auth/password", data={
        "old_password": "secret123", "new_password": "brandnew1",
        "confirm_password": "brandnew1",
    })
    assert r.status_code == 200
    client.get("/auth/logout")
    assert login("student1", "brandnew1").status_code == 200


def test_student_course_detail_has_no_roster(client, campus, login):
    enrollment.enroll(campus["other"].id, campus["course"].id)
    login("student1")
    cid = campus["course"].id
    assert client.get(f"/teacher/courses/{cid}/students").status_code == 403
    r = client.get(f"/teacher/courses/{cid}")
    assert r.status_code == 200
    assert r.get_json()["course"]["code"] == "CSE101"
    assert "students" not in r.get_json()["course"]


def test_department_filter_zero_is_not_ignored(client, campus, login):
    login("teacher1")
    r = client.get("/teacher/students?department_id=0")
    assert r.status_code == 404
    assert r.get_json()["error"] == "NotFound"
