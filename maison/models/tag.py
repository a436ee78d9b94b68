from ..extensions import db
from .base import BaseModel, isoformat, utcnow


class Tag(BaseModel):
    __tablename__ = 'tags'

    slug = db.Column(db.String(255), unique=True, nullable=False)
    name_en = db.Column(db.String(255), nullable=False)
    name_fr = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'slug': self.slug,
            'name_en': self.name_en,
            'name_fr': self.name_fr,
            'created_at': isoformat(self.created_at),
        }
