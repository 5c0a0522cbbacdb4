from datetime import date

import pytest
from werkzeug.datastructures import MultiDict

from locallibrary.forms import (
    AuthorForm,
    BookForm,
    BookInstanceForm,
    GenreForm,
    escape_markup,
    unescape_markup,
)


def test_escape_and_unescape_markup():
    escaped = escape_markup("<b>Tom & \"Jerry\"</b>")
    assert escaped == "&lt;b&gt;Tom &amp; &#34;Jerry&#34;&lt;/b&gt;"
    assert unescape_markup(escaped) == "<b>Tom & \"Jerry\"</b>"
    assert escape_markup("") == ""
    assert escape_markup(None) is None


def test_genre_name_is_trimmed_and_escaped():
    form = GenreForm(MultiDict({"name": "  Sci <Fi>  ", "extra": "ignored"}))
    assert form.validate()
    assert form.name.data == "Sci <Fi>"
    assert form.cleaned() == {"name": "Sci &lt;Fi&gt;"}


@pytest.mark.parametrize("name", ["", "   ", "ab"])
def test_genre_name_too_short(name):
    form = GenreForm(MultiDict({"name": name}))
    assert not form.validate()
    assert form.field_errors() == [("name", "Genre name must contain at least 3 characters")]


def test_genre_name_too_long():
    form = GenreForm(MultiDict({"name": "x" * 101}))
    assert not form.validate()
    assert form.field_errors() == [("name", "Genre name must be at most 100 characters.")]
    assert GenreForm(MultiDict({"name": "x" * 100})).validate()


def test_author_blank_required_fields_give_one_error_each():
    form = AuthorForm(MultiDict({"first_name": " ", "family_name": ""}))
    assert not form.validate()
    assert form.field_errors() == [
        ("first_name", "First name must be specified."),
        ("family_name", "Family name must be specified."),
    ]


def test_author_names_must_be_alphanumeric():
    form = AuthorForm(MultiDict({"first_name": "Jo-Ann", "family_name": "Smith"}))
    assert not form.validate()
    assert form.field_errors() == [("first_name", "First name has non-alphanumeric characters.")]


def test_author_dates_are_parsed():
    form = AuthorForm(MultiDict({
        "first_name": "Isaac",
        "family_name": "Asimov",
        "date_of_birth": "1920-01-02",
        "date_of_death": "",
    }))
    assert form.validate()
    assert form.cleaned() == {
        "first_name": "Isaac",
        "family_name": "Asimov",
        "date_of_birth": date(1920, 1, 2),
        "date_of_death": None,
    }


def test_author_invalid_date():
    form = AuthorForm(MultiDict({"first_name": "Isaac", "family_name": "Asimov", "date_of_birth": "yesterday"}))
    assert not form.validate()
    assert form.field_errors() == [("date_of_birth", "Invalid date of birth")]
    # The typed text is kept for the re-rendered form
    assert form.date_of_birth._value() == "yesterday"


def test_book_blank_fields_give_one_error_each():
    form = BookForm(MultiDict({"title": "", "author": "", "summary": "", "isbn": ""}))
    assert not form.validate()
    assert form.field_errors() == [
        ("title", "Title must not be empty."),
        ("author", "Author must not be empty."),
        ("summary", "Summary must not be empty."),
        ("isbn", "ISBN must not be empty"),
    ]


def test_book_collects_all_genres():
    form = BookForm(MultiDict([
        ("title", "Dune"), ("author", "1"), ("summary", "Spice."), ("isbn", "123"),
        ("genre", "2"), ("genre", "5"), ("genre", " "),
    ]))
    assert form.validate()
    assert form.cleaned()["genre"] == ["2", "5"]


def test_bookinstance_due_back_not_a_date():
    form = BookInstanceForm(MultiDict({"book": "1", "imprint": "Gollancz", "status": "Loaned", "due_back": "not-a-date"}))
    assert not form.validate()
    assert form.field_errors() == [("due_back", "Invalid date")]


def test_bookinstance_empty_due_back_and_status_are_accepted():
    form = BookInstanceForm(MultiDict({"book": "1", "imprint": "Gollancz", "status": "", "due_back": ""}))
    assert form.validate()
    values = form.cleaned()
    assert values["due_back"] is None
    assert values["status"] == "Maintenance"


def test_bookinstance_unknown_status():
    form = BookInstanceForm(MultiDict({"book": "1", "imprint": "Gollancz", "status": "Lost"}))
    assert not form.validate()
    assert form.field_errors() == [("status", "Invalid status")]


def test_form_from_record_unescapes_stored_text(store, author):
    author.first_name = "Ann&amp;e"
    form = AuthorForm.from_record(author)
    assert form.first_name.data == "Ann&e"
    assert form.date_of_birth._value() == "1920-01-02"


def test_book_form_from_record(book, genre, author):
    form = BookForm.from_record(book)
    assert form.title.data == "Foundation"
    assert form.author.data == str(author.id)
    assert form.genre.data == [str(genre.id)]
