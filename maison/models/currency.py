from ..extensions import db
from .base import BaseModel, isoformat, utcnow


class CurrencyRate(BaseModel):
    __tablename__ = 'currency_rates'

    currency_code = db.Column(db.String(3), unique=True, nullable=False)
    # Units of this currency per one unit of the base currency
    rate = db.Column(db.Numeric(18, 8), nullable=False, default=1)
    symbol = db.Column(db.String(10), nullable=False, default='')
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self, base_currency=None):
        rate = 1.0 if self.currency_code == base_currency else float(self.rate)
        return {
            'id': self.id,
            'currency_code': self.currency_code,
            'rate': rate,
            'symbol': self.symbol,
            'updated_at': isoformat(self.updated_at),
        }
