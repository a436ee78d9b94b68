"""
WTForms helpers for JSON request bodies.

Forms are bound with ``data=`` (no formdata), so every filter below receives
the raw JSON value and must cope with ``None``.
"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from flask import request
from wtforms.fields import FormField, IntegerField
from wtforms.utils import unset_value
from wtforms.validators import StopValidation, ValidationError

from ..errors import ValidationError as RequestValidationError


def text_filter(value):
    if value is None:
        return None
    return str(value).strip()


def decimal_filter(value):
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValueError('Not a valid decimal value.')
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError('Not a valid decimal value.')
    if not number.is_finite():
        raise ValueError('Not a valid decimal value.')
    return number


def date_filter(value):
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValueError('Not a valid date value.')


class Present:
    """Like DataRequired, except that 0 and False are values."""
    field_flags = {'required': True}

    def __init__(self, message=None):
        self.message = message

    def __call__(self, form, field):
        if field.data is None or (isinstance(field.data, str) and not field.data.strip()):
            raise StopValidation(self.message or field.gettext('This field is required.'))


class Minimum:
    """Lower bound that lets ``None`` through."""

    def __init__(self, minimum, message=None):
        self.minimum = minimum
        self.message = message

    def __call__(self, form, field):
        if field.data is not None and field.data < self.minimum:
            raise ValidationError(self.message or f'Must be at least {self.minimum}.')


class WholeIntegerField(IntegerField):
    """IntegerField that rejects booleans and fractional numbers instead of truncating them."""

    def process_data(self, value):
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            self.data = None
            raise ValueError(self.gettext('Not a valid integer value.'))
        super().process_data(value)


class JSONFormField(FormField):
    """
    FormField for a nested JSON object.

    The object goes to the subform as ``data=``, so only the subform's own
    field names are read and keys such as ``prefix`` or ``meta`` never reach
    the form constructor.
    """

    def process(self, formdata, data=unset_value, extra_filters=None):
        if extra_filters:
            raise TypeError('FormField cannot take filters, as the encapsulated data is not mutable.')
        if data is unset_value:
            try:
                data = self.default()
            except TypeError:
                data = self.default
            self._obj = data

        self.object_data = data
        prefix = self.name + self.separator
        # a non-object binds as empty and fails the subform's required fields
        self.form = self.form_class(formdata=formdata, prefix=prefix,
                                    data=data if isinstance(data, dict) else None)


def bind_json(form_class, payload, partial=False):
    """Build a form from a JSON object; ``partial`` drops the fields the payload leaves out."""
    if not isinstance(payload, dict):
        raise RequestValidationError('Request body must be a JSON object')
    form = form_class(data=payload)
    if partial:
        for name in list(form._fields):
            if name not in payload:
                del form[name]
    return form


def validated_data(form, payload, nested=()):
    """Form data for a valid form. Nested lists count only when the payload sends them."""
    if not form.validate():
        raise RequestValidationError('Invalid request data', details=form.errors)
    return {
        name: value for name, value in form.data.items()
        if name in payload or name not in nested
    }


def request_json():
    """The request's JSON object body; anything else is a 400."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise RequestValidationError('Request body must be a JSON object')
    return payload
