from flask import current_app, jsonify

from ..errors import ValidationError
from ..forms import request_json
from ..services.currency import CurrencyService
from . import admin_bp
from .decorators import admin_required


def currency_service():
    return CurrencyService.from_config(current_app.config)


@admin_bp.route('/currency', methods=['GET'])
@admin_required
def currency_rates():
    service = currency_service()
    return jsonify(success=True, currencies=service.serialize(service.list_rates()))


@admin_bp.route('/currency', methods=['PUT'])
@admin_required
def update_currency_rates():
    entries = request_json().get('currencies')
    if not isinstance(entries, list):
        raise ValidationError('currencies must be a list')
    service = currency_service()
    rates = service.update_rates(entries)
    return jsonify(success=True, currencies=service.serialize(rates))


@admin_bp.route('/currency/sync', methods=['POST'])
@admin_required
def sync_currency_rates():
    service = currency_service()
    rates, as_of = service.sync()
    return jsonify(
        success=True,
        message='Rates updated successfully',
        currencies=service.serialize(rates),
        source=service.api_url,
        date=as_of,
    )
