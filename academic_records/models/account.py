import enum

from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from ..extensions import db


class Role(str, enum.Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"


class Account(UserMixin, db.Model):
    __tablename__ = "account"
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    role = db.Column(db.Enum(Role), nullable=False)
    enabled = db.Column(db.Boolean, nullable=False, default=True)

    student = db.relationship("Student", back_populates="account", uselist=False,
                              cascade="all, delete-orphan")
    teacher = db.relationship("Teacher", back_populates="account", uselist=False,
                              cascade="all, delete-orphan")

    @property
    def is_active(self):
        return bool(self.enabled)

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
            "enabled": self.enabled,
        }
