from ..extensions import db
from .base import BaseModel, isoformat, utcnow


class Collection(BaseModel):
    __tablename__ = 'collections'

    slug = db.Column(db.String(255), unique=True, nullable=False)
    name_en = db.Column(db.String(255), nullable=False)
    name_fr = db.Column(db.String(255), nullable=False)
    description_en = db.Column(db.Text, nullable=True)
    description_fr = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    meta_title_en = db.Column(db.String(255), nullable=True)
    meta_title_fr = db.Column(db.String(255), nullable=True)
    meta_description_en = db.Column(db.Text, nullable=True)
    meta_description_fr = db.Column(db.Text, nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)  # storefront visibility
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'slug': self.slug,
            'name_en': self.name_en,
            'name_fr': self.name_fr,
            'description_en': self.description_en,
            'description_fr': self.description_fr,
            'image_url': self.image_url,
            'meta_title_en': self.meta_title_en,
            'meta_title_fr': self.meta_title_fr,
            'meta_description_en': self.meta_description_en,
            'meta_description_fr': self.meta_description_fr,
            'display_order': self.display_order,
            'is_active': self.is_active,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
