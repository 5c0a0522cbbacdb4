from datetime import date

import pytest

from locallibrary import create_app
from locallibrary.config import TestConfig
from locallibrary.models import Author, Book, BookInstance, Genre, db


@pytest.fixture
def app():
    # Each app gets its own in-memory database
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions["catalog_store"]


@pytest.fixture
def author(store):
    return store.create(Author(first_name="Isaac", family_name="Asimov",
                               date_of_birth=date(1920, 1, 2), date_of_death=date(1992, 4, 6)))


@pytest.fixture
def genre(store):
    return store.create(Genre(name="Science Fiction"))


@pytest.fixture
def book(store, author, genre):
    return store.create(Book(title="Foundation", author=author, summary="Psychohistory.",
                             isbn="9780553293357", genres=[genre]))


@pytest.fixture
def bookinstance(store, book):
    return store.create(BookInstance(book=book, imprint="Bantam, 1991.", status="Loaned",
                                     due_back=date(2026, 11, 2)))
