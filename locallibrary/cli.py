import logging
from datetime import date

import click

from .forms import escape_markup
from .models import Author, Book, BookInstance, Genre, db

logger = logging.getLogger(__name__)

SAMPLE_AUTHORS = [
    ("Patrick", "Rothfuss", date(1973, 6, 6), None),
    ("Ben", "Bova", date(1932, 11, 8), None),
    ("Isaac", "Asimov", date(1920, 1, 2), date(1992, 4, 6)),
    ("Bob", "Billings", None, None),
    ("Jim", "Jones", date(1971, 12, 16), None),
]

SAMPLE_GENRES = ["Fantasy", "Science Fiction", "French Poetry"]

# (title, summary, isbn, author index, genre indexes)
SAMPLE_BOOKS = [
    ("The Name of the Wind (The Kingkiller Chronicle, #1)",
     "I have stolen princesses back from sleeping barrow kings. I burned down the town of Trebon.",
     "9781473211896", 0, [0]),
    ("The Wise Man's Fear (The Kingkiller Chronicle, #2)",
     "Picking up the tale of Kvothe Kingkiller once again, we follow him into exile.",
     "9788401352836", 0, [0]),
    ("The Slow Regard of Silent Things (Kingkiller Chronicle)",
     "Deep below the University, there is a dark place. Few people know of it.",
     "9780756411336", 0, [0]),
    ("Apes and Angels",
     "Humankind headed out to the stars not for conquest, nor exploration, nor even for curiosity.",
     "9780765379528", 1, [1]),
    ("Death Wave",
     "In Ben Bova's previous novel New Earth, Jordan Kell led the first human mission beyond the solar system.",
     "9780765379504", 1, [1]),
    ("Test Book 1", "Summary of test book 1", "ISBN111111", 4, [0, 1]),
    ("Test Book 2", "Summary of test book 2", "ISBN222222", 4, []),
]

# (book index, imprint, status, due back)
SAMPLE_COPIES = [
    (0, "London Gollancz, 2014.", "Available", None),
    (1, "Gollancz, 2011.", "Loaned", date(2026, 11, 2)),
    (2, "Gollancz, 2015.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Maintenance", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Loaned", None),
    (5, "Imprint XXX2", "Available", None),
    (6, "Imprint XXX3", "Available", None),
]


def populate_sample_catalog(session):
    """Add a small sample catalog. Text goes through the same escaping as form input."""
    authors = [
        Author(first_name=first, family_name=family, date_of_birth=born, date_of_death=died)
        for first, family, born, died in SAMPLE_AUTHORS
    ]
    genres = [Genre(name=escape_markup(name)) for name in SAMPLE_GENRES]
    books = [
        Book(
            title=escape_markup(title),
            summary=escape_markup(summary),
            isbn=escape_markup(isbn),
            author=authors[author_index],
            genres=[genres[i] for i in genre_indexes],
        )
        for title, summary, isbn, author_index, genre_indexes in SAMPLE_BOOKS
    ]
    copies = [
        BookInstance(
            book=books[book_index],
            imprint=escape_markup(imprint),
            status=status,
            due_back=due_back or date.today(),
        )
        for book_index, imprint, status, due_back in SAMPLE_COPIES
    ]
    session.add_all(authors + genres + books + copies)
    session.commit()
    return {
        "authors": len(authors),
        "genres": len(genres),
        "books": len(books),
        "bookinstances": len(copies),
    }


def register_commands(app):
    @app.cli.command("init-db")
    @click.option("--sample", is_flag=True, help="Also add a small sample catalog.")
    def init_db(sample):
        """Create the catalog tables (and optionally sample data)."""
        db.create_all()
        click.echo("Initialized the database.")
        if sample:
            if db.session.scalar(db.select(db.func.count()).select_from(Author)):
                click.echo("Catalog already has data; skipping sample records.")
                return
            counts = populate_sample_catalog(db.session)
            logger.info(f"Sample catalog added: {counts}")
            click.echo(
                "Added {authors} authors, {genres} genres, {books} books "
                "and {bookinstances} copies.".format(**counts)
            )
