from flask import jsonify, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from ...errors import InvalidInput
from ...models import Role
from ...services import identity
from ...services.access import Identity
from . import bp


def current_identity():
    return Identity.of(current_user)


def dashboard_url(account):
    if account.role == Role.STUDENT:
        return url_for("student.dashboard")
    return url_for("teacher.dashboard")


@bp.post("/login")
def login():
    username = request.form.get("username", "").strip()
    password = request.form.get("password", "")
    account = identity.authenticate(username, password)
    login_user(account)
    return jsonify(account=account.to_dict(), dashboard=dashboard_url(account))


@bp.get("/logout")
@login_required
def logout():
    logout_user()
    return jsonify(status="logged out")


@bp.get("/me")
@login_required
def me():
    profile = current_user.student or current_user.teacher
    return jsonify(
        account=current_user.to_dict(),
        profile=profile.to_dict() if profile else None,
        dashboard=dashboard_url(current_user),
    )


@bp.post("/password")
@login_required
def change_password():
    old = request.form.get("old_password", "")
    new = request.form.get("new_password", "")
    confirm = request.form.get("confirm_password", "")
    if new != confirm:
        raise InvalidInput("Passwords do not match")
    identity.change_password(current_user.id, old, new)
    return jsonify(status="Password updated")
