import secrets
import string
import time

from flask import current_app, request

ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp', 'image/gif')
MAX_UPLOAD_SIZE = 5 * 1024 * 1024
DEFAULT_UPLOAD_FOLDER = 'products'

_ALPHABET = string.ascii_lowercase + string.digits


def request_token():
    """Admin session token from ``Authorization: Bearer`` or the session cookie."""
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        token = header[7:].strip()
        if token:
            return token
    return request.cookies.get(current_app.config['ADMIN_SESSION_COOKIE'])


def upload_key(folder, filename, now_ms=None):
    """``{folder}/{epoch_ms}-{random6}.{ext}``, ext taken from the uploaded filename."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    random_part = ''.join(secrets.choice(_ALPHABET) for _ in range(6))
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else 'bin'
    folder = (folder or DEFAULT_UPLOAD_FOLDER).strip('/')
    return f'{folder}/{now_ms}-{random_part}.{ext}'


def query_int(name, default):
    value = request.args.get(name, type=int)
    return default if value is None else value
