"""
Request handlers for the catalog.

A handler takes the store plus the path id and/or submitted form data and
returns an outcome. It never touches Flask's request or response objects:

* ``Render(template, context)`` to show a page,
* ``Redirect(url)`` after a write, or to leave a page that can't be shown,
* ``Failure(status, message)`` when the request can't be served (e.g. 404).

views.py turns outcomes into Flask responses.
"""

from dataclasses import dataclass, field

from ..models import Author, Book, BookInstance, Genre


@dataclass(frozen=True)
class Render:
    template: str
    context: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass(frozen=True)
class Failure:
    status: int
    message: str


def not_found(label):
    return Failure(404, f"{label} not found")


def index(store):
    """Home page: how many of each record the catalog holds."""
    return Render("index.html", {
        "title": "Local Library Home",
        "book_count": store.count(Book),
        "book_instance_count": store.count(BookInstance),
        "book_instance_available_count": store.count(BookInstance, BookInstance.status == "Available"),
        "author_count": store.count(Author),
        "genre_count": store.count(Genre),
    })
