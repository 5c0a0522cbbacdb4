"""
Referential integrity rules for the catalog.

The database doesn't enforce references between records, so these rules are
applied here before anything is written or deleted:

* A Genre, Author or Book can't be deleted while a Book or BookInstance still
  points at it. The blocked delete returns the dependents so they can be shown.
* A Genre is identified by its name and a Book by its ISBN, both compared
  case-insensitively through a case-folded key column. Creating a record
  whose key already exists returns the existing record instead of storing a
  second one.
* A Book's author and genres, and a BookInstance's book, must exist before
  the record is saved.
"""

import logging
from dataclasses import dataclass, field

from .models import Author, Book, BookInstance, Genre, identity_key
from .store import coerce_id

logger = logging.getLogger(__name__)


def _books_in_genre(store, ident):
    return store.find(Book, Book.genres.any(Genre.id == ident), sort=(Book.title,))


def _books_by_author(store, ident):
    return store.find(Book, Book.author_id == ident, sort=(Book.title,))


def _copies_of_book(store, ident):
    return store.find(BookInstance, BookInstance.book_id == ident, sort=(BookInstance.id,))


DEPENDENT_LOOKUPS = {
    Genre: _books_in_genre,
    Author: _books_by_author,
    Book: _copies_of_book,
}

IDENTITY_KEYS = {
    Genre: Genre.name_key,
    Book: Book.isbn_key,
}


@dataclass
class DeletionResult:
    record: object = None
    dependents: list = field(default_factory=list)

    @property
    def found(self):
        return self.record is not None

    @property
    def blocked(self):
        return bool(self.dependents)

    @property
    def deleted(self):
        return self.found and not self.blocked


def find_dependents(store, model, ident):
    """Records that reference ``model`` #``ident``; empty for models nothing points at."""
    lookup = DEPENDENT_LOOKUPS.get(model)
    ident = coerce_id(ident)
    if lookup is None or ident is None:
        return []
    return lookup(store, ident)


def delete_unreferenced(store, model, ident):
    """Delete a record only if nothing references it.

    Returns a ``DeletionResult``: ``record`` is ``None`` when the id doesn't
    resolve, ``dependents`` is non-empty when the delete was refused.
    """
    record = store.get(model, ident)
    if record is None:
        return DeletionResult()

    dependents = find_dependents(store, model, record.id)
    if dependents:
        logger.info(f"Refusing to delete {record!r}: {len(dependents)} record(s) still reference it")
        return DeletionResult(record, dependents)

    store.delete(model, record.id)
    return DeletionResult(record)


def find_duplicate(store, model, key, exclude_id=None):
    """Return the stored record whose identity key equals ``key`` ignoring case.

    ``exclude_id`` skips the record being updated so its own key never counts
    as a duplicate.
    """
    column = IDENTITY_KEYS[model]
    if not key:
        return None
    criteria = [column == identity_key(key)]
    if exclude_id is not None:
        criteria.append(model.id != exclude_id)
    duplicate = store.first(model, *criteria, sort=(model.id,))
    if duplicate is not None:
        logger.info(f"{model.__name__} key {key!r} resolves to existing {duplicate!r}")
    return duplicate


def resolve_author(store, author_id):
    return store.get(Author, author_id)


def resolve_genres(store, genre_ids):
    """Look up each genre id. Returns ``(genres, missing_ids)``."""
    genres, missing = [], []
    for genre_id in genre_ids:
        genre = store.get(Genre, genre_id)
        if genre is None:
            missing.append(genre_id)
        elif genre not in genres:
            genres.append(genre)
    return genres, missing


def resolve_book(store, book_id):
    return store.get(Book, book_id)
