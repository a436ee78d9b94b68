from wtforms import Form
from wtforms.fields import DecimalField, FieldList, StringField
from wtforms.validators import DataRequired, NumberRange

from . import JSONFormField, Minimum, Present, WholeIntegerField, decimal_filter, text_filter


class CartItemForm(Form):
    product_id = StringField('Product', validators=[DataRequired()], filters=[text_filter])
    product_name_en = StringField('Name (EN)', validators=[DataRequired()], filters=[text_filter])
    product_name_fr = StringField('Name (FR)', filters=[text_filter])
    product_sku = StringField('SKU', filters=[text_filter])
    product_image_url = StringField('Image', filters=[text_filter])
    quantity = WholeIntegerField('Quantity', default=1, validators=[Present(), NumberRange(min=1)])
    unit_price = DecimalField('Unit price', filters=[decimal_filter], validators=[Present(), Minimum(0)])
    size = StringField('Size', filters=[text_filter])
    color = StringField('Color', filters=[text_filter])


class CustomerForm(Form):
    first_name = StringField('First name', validators=[DataRequired()], filters=[text_filter])
    last_name = StringField('Last name', validators=[DataRequired()], filters=[text_filter])
    email = StringField('Email', validators=[DataRequired()], filters=[text_filter])
    phone = StringField('Phone', filters=[text_filter])


class ShippingForm(Form):
    address = StringField('Address', validators=[DataRequired()], filters=[text_filter])
    city = StringField('City', validators=[DataRequired()], filters=[text_filter])
    postal_code = StringField('Postal code', filters=[text_filter])
    country = StringField('Country', validators=[DataRequired()], filters=[text_filter])


class CheckoutForm(Form):
    items = FieldList(JSONFormField(CartItemForm))
    customer = JSONFormField(CustomerForm)
    shipping = JSONFormField(ShippingForm)
    customer_notes = StringField('Notes', filters=[text_filter])


class CartLineForm(Form):
    product_id = StringField('Product', validators=[DataRequired()], filters=[text_filter])
    size = StringField('Size', filters=[text_filter])
    color = StringField('Color', filters=[text_filter])
    quantity = WholeIntegerField('Quantity', default=1, validators=[Present()])
