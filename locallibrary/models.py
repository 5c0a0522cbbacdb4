"""
Catalog models: Genre, Author, Book and BookInstance (a physical copy of a book).

Text columns hold values that were already escaped by the form layer.
Computed fields (canonical URL, display names, formatted dates) are read-only
properties derived on access; nothing derived is stored.

References between records are plain foreign-key columns. The database does not
enforce them; see integrity.py for the rules applied before deletes and writes.
"""

from datetime import date

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import validates

db = SQLAlchemy()

BOOK_INSTANCE_STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_BOOK_INSTANCE_STATUS = "Maintenance"


def format_medium_date(value):
    """Render a date like ``Oct 19, 2026``; blank for ``None``."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def identity_key(value):
    """Case-folded form of a name or ISBN, used to spot duplicates."""
    return (value or "").casefold()


def format_form_date(value):
    """Render a date for an ``<input type="date">`` value."""
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


book_genres = db.Table(
    "book_genres",
    db.Column("book_id", db.Integer, db.ForeignKey("books.id"), primary_key=True),
    db.Column("genre_id", db.Integer, db.ForeignKey("genres.id"), primary_key=True),
)


class Genre(db.Model):
    __tablename__ = "genres"
    list_url = "/catalog/genres"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    name_key = db.Column(db.String(100), nullable=False, index=True)

    @validates("name")
    def _set_name_key(self, key, value):
        self.name_key = identity_key(value)
        return value

    @property
    def url(self):
        return f"/catalog/genre/{self.id}"

    def __repr__(self):
        return f"<Genre name={self.name}>"


class Author(db.Model):
    __tablename__ = "authors"
    list_url = "/catalog/authors"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False, index=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    date_of_death = db.Column(db.Date, nullable=True)

    books = db.relationship("Book", back_populates="author", order_by="Book.title")

    @property
    def name(self):
        # Blank rather than a half name when either part is missing
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def lifespan(self):
        return f"{format_medium_date(self.date_of_birth)} - {format_medium_date(self.date_of_death)}"

    @property
    def date_of_birth_formatted(self):
        return format_medium_date(self.date_of_birth)

    @property
    def date_of_death_formatted(self):
        return format_medium_date(self.date_of_death)

    @property
    def date_of_birth_form_format(self):
        return format_form_date(self.date_of_birth)

    @property
    def date_of_death_form_format(self):
        return format_form_date(self.date_of_death)

    @property
    def url(self):
        return f"/catalog/author/{self.id}"

    def __repr__(self):
        return f"<Author name={self.name}>"


class Book(db.Model):
    __tablename__ = "books"
    list_url = "/catalog/books"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey("authors.id"), nullable=False, index=True)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(32), nullable=False)
    isbn_key = db.Column(db.String(32), nullable=False, index=True)

    author = db.relationship("Author", back_populates="books")
    genres = db.relationship("Genre", secondary=book_genres, order_by="Genre.name")
    instances = db.relationship("BookInstance", back_populates="book")

    @validates("isbn")
    def _set_isbn_key(self, key, value):
        self.isbn_key = identity_key(value)
        return value

    @property
    def url(self):
        return f"/catalog/book/{self.id}"

    def __repr__(self):
        return f"<Book title={self.title}>"


class BookInstance(db.Model):
    __tablename__ = "book_instances"
    list_url = "/catalog/bookinstances"

    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)
    imprint = db.Column(db.String(300), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_BOOK_INSTANCE_STATUS)
    due_back = db.Column(db.Date, nullable=False, default=date.today)

    book = db.relationship("Book", back_populates="instances")

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('Available', 'Maintenance', 'Loaned', 'Reserved')",
            name="ck_book_instance_status",
        ),
    )

    @property
    def url(self):
        return f"/catalog/bookinstance/{self.id}"

    @property
    def due_back_formatted(self):
        return format_medium_date(self.due_back)

    @property
    def due_back_form_format(self):
        return format_form_date(self.due_back)

    def __repr__(self):
        return f"<BookInstance imprint={self.imprint} status={self.status}>"
