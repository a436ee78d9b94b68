from flask import current_app, jsonify, request

from ..errors import ValidationError
from . import admin_bp
from .decorators import admin_required
from .utils import ALLOWED_IMAGE_TYPES, DEFAULT_UPLOAD_FOLDER, MAX_UPLOAD_SIZE, upload_key


@admin_bp.route('/upload', methods=['POST'])
@admin_required
def upload_media():
    """Store one product image (multipart field ``file``) in the media bucket."""
    file = request.files.get('file')
    if file is None or not file.filename:
        raise ValidationError('No file provided')
    if file.mimetype not in ALLOWED_IMAGE_TYPES:
        raise ValidationError('Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed.')

    data = file.read()
    if len(data) > MAX_UPLOAD_SIZE:
        raise ValidationError('File size exceeds 5MB limit')

    storage = current_app.extensions['object_storage']
    path = storage.upload(upload_key(request.form.get('folder') or DEFAULT_UPLOAD_FOLDER, file.filename), data)
    current_app.logger.info('Uploaded %s (%d bytes)', path, len(data))
    return jsonify(success=True, url=storage.public_url(path), path=path)


@admin_bp.route('/upload', methods=['DELETE'])
@admin_required
def delete_media():
    path = request.args.get('path')
    if not path:
        raise ValidationError('No path provided')
    storage = current_app.extensions['object_storage']
    if storage.delete(path):
        current_app.logger.info('Deleted %s', path)
    return jsonify(success=True)
