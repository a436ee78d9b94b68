from flask import Blueprint, current_app, jsonify
from flask_login import current_user

from ..admin.decorators import admin_required
from ..admin.forms import LoginForm
from ..admin.utils import request_token
from ..errors import ValidationError
from ..forms import bind_json, request_json
from ..services.auth import AuthService

auth_bp = Blueprint('auth', __name__, url_prefix='/api/admin')


@auth_bp.route('/login', methods=['POST'])
def login():
    payload = request_json()
    form = bind_json(LoginForm, payload)
    if not form.validate():
        raise ValidationError('Username and password are required', details=form.errors)

    admin_session = AuthService().login(form.username.data, form.password.data, form.remember_me.data)
    response = jsonify(success=True, token=admin_session.token, username=form.username.data)
    response.set_cookie(
        current_app.config['ADMIN_SESSION_COOKIE'],
        admin_session.token,
        expires=admin_session.expires_at,
        httponly=True,
        secure=current_app.config['SESSION_COOKIE_SECURE'],
        samesite='Lax',
    )
    return response


@auth_bp.route('/logout', methods=['POST'])
def logout():
    AuthService().logout(request_token())
    response = jsonify(success=True)
    response.delete_cookie(current_app.config['ADMIN_SESSION_COOKIE'])
    return response


@auth_bp.route('/session', methods=['GET'])
def session_status():
    if current_user.is_authenticated:
        return jsonify(authenticated=True, username=current_user.username)
    return jsonify(authenticated=False)


@auth_bp.route('/settings/password', methods=['PUT'])
@admin_required
def change_password():
    payload = request_json()
    AuthService().change_password(
        current_user.id,
        payload.get('currentPassword', payload.get('current_password')),
        payload.get('newPassword', payload.get('new_password')),
    )
    return jsonify(success=True)
