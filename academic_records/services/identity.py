import logging

from flask import current_app

from ..errors import (
    DuplicateEmail, DuplicateUsername, InvalidCredentials, InvalidInput, NotFound,
)
from ..extensions import db
from ..models import Account, Role
from .tx import atomic

log = logging.getLogger("academic_records.identity")


def get_by_id(account_id):
    return db.session.get(Account, account_id)


def find_by_username(username):
    return Account.query.filter_by(username=username).one_or_none()


def find_by_email(email):
    return Account.query.filter_by(email=email).one_or_none()


def create_account(username, raw_password, email, role):
    username = (username or "").strip()
    email = (email or "").strip()
    if not username or not email or not raw_password:
        raise InvalidInput("Username, password and email are required")
    try:
        role = Role(role)
    except ValueError:
        raise InvalidInput(f"Unknown role {role!r}") from None
    with atomic() as session:
        if find_by_username(username) is not None:
            raise DuplicateUsername(username)
        if find_by_email(email) is not None:
            raise DuplicateEmail(email)
        account = Account(username=username, email=email, role=role, enabled=True)
        account.set_password(raw_password)
        session.add(account)
        session.flush()
    log.info("created %s account %s (id=%s)", role.value, username, account.id)
    return account


def delete_account(account_id):
    with atomic() as session:
        account = session.get(Account, account_id)
        if account is None:
            return
        session.delete(account)
    log.info("deleted account id=%s", account_id)


def authenticate(username, raw_password):
    account = find_by_username((username or "").strip())
    if account is None or not account.enabled or not account.check_password(raw_password or ""):
        log.warning("failed login for %r", username)
        raise InvalidCredentials()
    return account


def change_password(account_id, old_password, new_password):
    min_length = current_app.config.get("MIN_PASSWORD_LENGTH", 6)
    with atomic():
        account = get_by_id(account_id)
        if account is None or not account.check_password(old_password or ""):
            raise InvalidCredentials("Current password is incorrect")
        if len(new_password or "") < min_length:
            raise InvalidInput(f"New password must be at least {min_length} characters")
        account.set_password(new_password)
    log.info("password changed for account id=%s", account_id)
    return account


def set_enabled(account_id, enabled):
    with atomic():
        account = get_by_id(account_id)
        if account is None:
            raise NotFound("Account", account_id)
        account.enabled = bool(enabled)
    log.info("account id=%s enabled=%s", account_id, account.enabled)
    return account
