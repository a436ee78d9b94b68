"""
Admin sessions: a random bearer token per login, stored with its expiry.
"""
import logging
import secrets
from datetime import timedelta

from ..errors import AuthenticationError, NotFoundError, ValidationError
from ..models import Admin, AdminSession
from ..models.admin import hash_password
from ..models.base import utcnow
from .datastore import Repository

logger = logging.getLogger(__name__)

SESSION_DURATION = timedelta(hours=24)
REMEMBER_ME_DURATION = timedelta(days=30)


def generate_token():
    return secrets.token_hex(32)


class AuthService:
    def __init__(self, admins=None, sessions=None):
        self.admins = admins or Repository(Admin)
        self.sessions = sessions or Repository(AdminSession)

    def login(self, username, password, remember_me=False):
        admin = self.admins.find_one(username=username) if username else None
        if admin is None or not isinstance(password, str) or not admin.check_password(password):
            logger.info('Failed admin login for %r', username)
            raise AuthenticationError('Invalid credentials')

        expires_at = utcnow() + (REMEMBER_ME_DURATION if remember_me else SESSION_DURATION)
        session = self.sessions.insert(
            admin_id=admin.id,
            token=generate_token(),
            expires_at=expires_at,
            remember_me=bool(remember_me),
        )
        logger.info('Admin %s logged in', admin.username)
        return session

    def resolve(self, token):
        """Admin owning a live session token; expired sessions are removed on sight."""
        if not token:
            return None
        session = self.sessions.find_one(token=token)
        if session is None:
            return None
        if session.is_expired():
            self.sessions.delete(session)
            return None
        return session.admin

    def logout(self, token):
        if token:
            self.sessions.delete_where(token=token)

    def change_password(self, admin_id, current_password, new_password):
        if not isinstance(current_password, str) or not isinstance(new_password, str) \
                or not current_password or not new_password:
            raise ValidationError('Both current and new password are required')
        admin = self.admins.get(admin_id)
        if admin is None:
            raise NotFoundError('Admin not found')
        if not admin.check_password(current_password):
            raise ValidationError('Current password is incorrect')
        admin.set_password(new_password)
        self.admins.save(admin)
        logger.info('Admin %s changed password', admin.username)

    def create_admin(self, username, password):
        if self.admins.find_one(username=username):
            raise ValidationError(f'Admin {username} already exists')
        return self.admins.insert(username=username, password_hash=hash_password(password))

    def purge_expired(self):
        deleted = (self.sessions.query()
                   .filter(AdminSession.expires_at < utcnow())
                   .delete(synchronize_session=False))
        self.sessions.session.commit()
        return deleted
