import logging
import os

from ..errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """Bucket of uploaded files kept under ``root/bucket`` and served from ``base_url``."""

    def __init__(self, root, bucket, base_url):
        self.bucket_path = os.path.abspath(os.path.join(root, bucket))
        self.bucket = bucket
        self.base_url = base_url.rstrip('/')

    @classmethod
    def from_config(cls, config):
        return cls(config['UPLOAD_FOLDER'], config['STORAGE_BUCKET'], config['MEDIA_URL'])

    def _resolve(self, path):
        full_path = os.path.abspath(os.path.join(self.bucket_path, path))
        if not path or not full_path.startswith(self.bucket_path + os.sep):
            raise ValidationError('Invalid storage path')
        return full_path

    def upload(self, path, data):
        full_path = self._resolve(path)
        if os.path.exists(full_path):
            raise PersistenceError(f'Object already exists: {path}')
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        try:
            with open(full_path, 'wb') as fh:
                fh.write(data)
        except OSError as e:
            logger.error('Upload of %s failed: %s', path, e)
            raise PersistenceError('Failed to upload file') from e
        return path

    def delete(self, path):
        full_path = self._resolve(path)
        if not os.path.exists(full_path):
            return False
        try:
            os.remove(full_path)
        except OSError as e:
            logger.error('Delete of %s failed: %s', path, e)
            raise PersistenceError('Failed to delete file') from e
        return True

    def exists(self, path):
        return os.path.exists(self._resolve(path))

    def public_url(self, path):
        return f'{self.base_url}/{self.bucket}/{path}'
