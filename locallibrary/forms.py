"""
Input validation for the catalog forms.

Forms are plain WTForms forms so they can be fed any multi-dict (the request
form, or a ``MultiDict`` in tests). CSRF checking happens app-wide through
Flask-WTF's ``CSRFProtect``.

Each text field is trimmed before validation. After a successful ``validate()``
``cleaned()`` returns the record values with markup-significant characters
escaped; that is what gets stored.
"""

from dateutil.parser import isoparse
from markupsafe import Markup, escape
from wtforms import Field, Form, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Regexp, ValidationError

from .models import BOOK_INSTANCE_STATUSES, DEFAULT_BOOK_INSTANCE_STATUS


def strip_whitespace(value):
    if isinstance(value, str):
        return value.strip()
    return value


def escape_markup(value):
    if not value:
        return value
    return str(escape(value))


def unescape_markup(value):
    if not value:
        return value
    return Markup(value).unescape()


class IsoDateField(StringField):
    """Optional date typed as text. Blank means no date; anything else must be ISO 8601."""

    def __init__(self, label=None, validators=None, message="Invalid date", **kwargs):
        super().__init__(label, validators, **kwargs)
        self.message = message
        self.raw_text = ""

    def process_formdata(self, valuelist):
        self.raw_text = (valuelist[0] if valuelist else "") or ""
        self.raw_text = self.raw_text.strip()
        if not self.raw_text:
            self.data = None
            return
        try:
            self.data = isoparse(self.raw_text).date()
        except (ValueError, OverflowError):
            self.data = None
            raise ValueError(self.message)

    def _value(self):
        if self.raw_text:
            return self.raw_text
        return self.data.strftime("%Y-%m-%d") if self.data else ""


class MultiValueField(Field):
    """Collects every submitted value for a name, e.g. a group of checkboxes."""

    def process_formdata(self, valuelist):
        self.data = [value.strip() for value in valuelist if value and value.strip()]

    def process_data(self, value):
        self.data = [str(item) for item in value] if value else []


class CatalogForm(Form):
    escaped_fields = ()
    _record_fields = ()

    def field_errors(self):
        """Return ``(field, message)`` pairs in field order, one per failing field."""
        return [(field.name, field.errors[0]) for field in self if field.errors]

    def add_error(self, name, message):
        self[name].errors = list(self[name].errors) + [message]

    def cleaned(self):
        values = {}
        for field in self:
            value = field.data
            if field.name in self.escaped_fields:
                if isinstance(value, list):
                    value = [escape_markup(item) for item in value]
                else:
                    value = escape_markup(value)
            values[field.name] = value
        return values

    @classmethod
    def from_record(cls, record):
        """Prefill a form from a stored record, undoing the storage escaping."""
        data = {}
        for name in cls._record_fields:
            value = getattr(record, name)
            data[name] = unescape_markup(value) if name in cls.escaped_fields else value
        return cls(data=data)


class GenreForm(CatalogForm):
    escaped_fields = ("name",)
    _record_fields = ("name",)

    name = StringField(
        "Genre",
        filters=[strip_whitespace],
        validators=[
            Length(min=3, message="Genre name must contain at least 3 characters"),
            Length(max=100, message="Genre name must be at most 100 characters."),
        ],
    )


class AuthorForm(CatalogForm):
    escaped_fields = ("first_name", "family_name")
    _record_fields = ("first_name", "family_name", "date_of_birth", "date_of_death")

    first_name = StringField(
        "First Name",
        filters=[strip_whitespace],
        validators=[
            DataRequired(message="First name must be specified."),
            Regexp(r"^[A-Za-z0-9]+$", message="First name has non-alphanumeric characters."),
            Length(max=100, message="First name must be at most 100 characters."),
        ],
    )
    family_name = StringField(
        "Family Name",
        filters=[strip_whitespace],
        validators=[
            DataRequired(message="Family name must be specified."),
            Regexp(r"^[A-Za-z0-9]+$", message="Family name has non-alphanumeric characters."),
            Length(max=100, message="Family name must be at most 100 characters."),
        ],
    )
    date_of_birth = IsoDateField("Date of birth", message="Invalid date of birth")
    date_of_death = IsoDateField("Date of death", message="Invalid date of death")


class BookForm(CatalogForm):
    escaped_fields = ("title", "author", "summary", "isbn", "genre")
    _record_fields = ("title", "summary", "isbn")

    title = StringField("Title", filters=[strip_whitespace], validators=[DataRequired(message="Title must not be empty.")])
    author = StringField("Author", filters=[strip_whitespace], validators=[DataRequired(message="Author must not be empty.")])
    summary = TextAreaField("Summary", filters=[strip_whitespace], validators=[DataRequired(message="Summary must not be empty.")])
    isbn = StringField("ISBN", filters=[strip_whitespace], validators=[DataRequired(message="ISBN must not be empty")])
    genre = MultiValueField("Genre")

    @classmethod
    def from_record(cls, record):
        form = super().from_record(record)
        form.author.data = str(record.author_id)
        form.genre.data = [str(genre.id) for genre in record.genres]
        return form


class BookInstanceForm(CatalogForm):
    escaped_fields = ("book", "imprint", "status")
    _record_fields = ("imprint", "status", "due_back")

    book = StringField("Book", filters=[strip_whitespace], validators=[DataRequired(message="Book must be specified")])
    imprint = StringField("Imprint", filters=[strip_whitespace], validators=[DataRequired(message="Imprint must be specified")])
    status = StringField("Status", filters=[strip_whitespace])
    due_back = IsoDateField("Date when book available", message="Invalid date")

    def validate_status(self, field):
        if not field.data:
            field.data = DEFAULT_BOOK_INSTANCE_STATUS
        elif field.data not in BOOK_INSTANCE_STATUSES:
            raise ValidationError("Invalid status")

    @classmethod
    def from_record(cls, record):
        form = super().from_record(record)
        form.book.data = str(record.book_id)
        return form
