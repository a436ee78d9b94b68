import bcrypt
from flask_login import UserMixin

from ..extensions import db
from .base import BaseModel, utcnow


class Admin(BaseModel, UserMixin):
    __tablename__ = 'admins'

    username = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    sessions = db.relationship('AdminSession', backref='admin', cascade='all, delete-orphan')

    def check_password(self, password):
        return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))

    def set_password(self, password):
        self.password_hash = hash_password(password)


class AdminSession(BaseModel):
    __tablename__ = 'admin_sessions'

    admin_id = db.Column(db.String(36), db.ForeignKey('admins.id', ondelete='CASCADE'), nullable=False, index=True)
    token = db.Column(db.String(64), unique=True, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    remember_me = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def is_expired(self, now=None):
        return self.expires_at < (now or utcnow())


def hash_password(password):
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')
