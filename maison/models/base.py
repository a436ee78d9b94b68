import re
import uuid
from datetime import datetime, timezone

from unidecode import unidecode

from ..extensions import db


def utcnow():
    """Naive UTC timestamp, the format every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_uuid():
    return str(uuid.uuid4())


def money(value):
    if value is None:
        return None
    return float(value)


def isoformat(value):
    return value.isoformat() if value is not None else None


class BaseModel(db.Model):
    __abstract__ = True
    id = db.Column(db.String(36), primary_key=True, default=new_uuid)

    @staticmethod
    def slugify(value):
        """
        Slug for URLs:
        - transliterate to ASCII (accents included)
        - lower case
        - every run of non-alphanumerics becomes one hyphen
        """
        value = unidecode(value or '')
        value = re.sub(r'[^a-zA-Z0-9]+', '-', value.lower())
        return value.strip('-')
