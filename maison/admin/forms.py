from wtforms import Form
from wtforms.fields import BooleanField, DateField, DecimalField, FieldList, StringField
from wtforms.validators import AnyOf, DataRequired, Length, NumberRange, Regexp, ValidationError

from ..forms import (JSONFormField, Minimum, Present, WholeIntegerField, date_filter, decimal_filter,
                     text_filter)
from ..models.base import BaseModel
from ..models.product import PRODUCT_STATUSES


class ImageForm(Form):
    image_url = StringField('Image URL', validators=[DataRequired()], filters=[text_filter])
    display_order = WholeIntegerField('Order', default=0, validators=[Present()])
    alt_text_en = StringField('Alt (EN)', filters=[text_filter])
    alt_text_fr = StringField('Alt (FR)', filters=[text_filter])
    color_id = StringField('Color', filters=[text_filter])


class SizeForm(Form):
    size = StringField('Size', validators=[DataRequired()], filters=[text_filter])
    stock_quantity = WholeIntegerField('Stock', default=0, validators=[Present(), Minimum(0)])
    price_adjustment = DecimalField('Price adjustment', default=0, filters=[decimal_filter], validators=[Present()])
    display_order = WholeIntegerField('Order', default=0, validators=[Present()])


class ColorForm(Form):
    name_en = StringField('Name (EN)', validators=[DataRequired()], filters=[text_filter])
    name_fr = StringField('Name (FR)', validators=[DataRequired()], filters=[text_filter])
    hex_code = StringField('Hex', validators=[DataRequired(), Regexp(r'^#[0-9a-fA-F]{6}$')],
                           filters=[text_filter])
    stock_quantity = WholeIntegerField('Stock', default=0, validators=[Present(), Minimum(0)])
    display_order = WholeIntegerField('Order', default=0, validators=[Present()])


class ProductForm(Form):
    sku = StringField('SKU', filters=[text_filter])
    name_en = StringField('Name (EN)', validators=[DataRequired(), Length(max=255)], filters=[text_filter])
    name_fr = StringField('Name (FR)', validators=[DataRequired(), Length(max=255)], filters=[text_filter])
    description_en = StringField('Description (EN)')
    description_fr = StringField('Description (FR)')
    price = DecimalField('Price', filters=[decimal_filter], validators=[Present(), Minimum(0)])
    original_price = DecimalField('Original price', filters=[decimal_filter], validators=[Minimum(0)])

    is_promotion = BooleanField('Promotion', default=False)
    promotion_start_date = DateField('Promotion start', filters=[date_filter])
    promotion_end_date = DateField('Promotion end', filters=[date_filter])
    promotion_label_en = StringField('Promotion label (EN)', filters=[text_filter])
    promotion_label_fr = StringField('Promotion label (FR)', filters=[text_filter])

    stock_quantity = WholeIntegerField('Stock', default=0, validators=[Present(), Minimum(0)])
    low_stock_threshold = WholeIntegerField('Low stock threshold', default=5, validators=[Present(), Minimum(0)])
    status = StringField('Status', default='draft', validators=[AnyOf(PRODUCT_STATUSES)])
    is_featured = BooleanField('Featured', default=False)
    is_new = BooleanField('New', default=False)

    meta_title_en = StringField('SEO title (EN)', filters=[text_filter])
    meta_title_fr = StringField('SEO title (FR)', filters=[text_filter])
    meta_description_en = StringField('SEO description (EN)')
    meta_description_fr = StringField('SEO description (FR)')
    display_order = WholeIntegerField('Order', default=0, validators=[Present()])

    images = FieldList(JSONFormField(ImageForm))
    sizes = FieldList(JSONFormField(SizeForm))
    colors = FieldList(JSONFormField(ColorForm))
    collections = FieldList(StringField('Collection', filters=[text_filter]))
    tags = FieldList(StringField('Tag', filters=[text_filter]))

    def validate_promotion_end_date(self, field):
        start = self.promotion_start_date.data if self.promotion_start_date else None
        if start and field.data and field.data < start:
            raise ValidationError('Promotion cannot end before it starts.')


class SlugForm(Form):
    slug = StringField('Slug', filters=[text_filter])
    name_en = StringField('Name (EN)', validators=[DataRequired()], filters=[text_filter])
    name_fr = StringField('Name (FR)', validators=[DataRequired()], filters=[text_filter])

    def process_slug(self):
        """Slug from the given value, or from the English name when left empty."""
        if self.slug is None:
            return
        source = self.slug.data or (self.name_en.data if self.name_en else None)
        self.slug.data = BaseModel.slugify(source) or None

    def validate_slug(self, field):
        if not field.data:
            raise ValidationError('Slug is required.')


class CollectionForm(SlugForm):
    description_en = StringField('Description (EN)')
    description_fr = StringField('Description (FR)')
    image_url = StringField('Image', filters=[text_filter])
    meta_title_en = StringField('SEO title (EN)', filters=[text_filter])
    meta_title_fr = StringField('SEO title (FR)', filters=[text_filter])
    meta_description_en = StringField('SEO description (EN)')
    meta_description_fr = StringField('SEO description (FR)')
    display_order = WholeIntegerField('Order', default=0, validators=[Present(), NumberRange(min=0)])
    is_active = BooleanField('Active', default=True)


class TagForm(SlugForm):
    pass


class LoginForm(Form):
    username = StringField('Username', validators=[DataRequired()], filters=[text_filter])
    password = StringField('Password', validators=[DataRequired()])
    remember_me = BooleanField('Remember me', default=False)
