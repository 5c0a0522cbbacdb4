from markupsafe import Markup

from .. import integrity
from ..forms import BookForm
from ..models import Author, Book, Genre
from . import Redirect, Render, not_found


def _form_page(store, title, form, book=None):
    # Picklists for the author select and the genre checkboxes
    return Render("book_form.html", {
        "title": title,
        "book": book,
        "form": form,
        "authors": store.find(Author, sort=(Author.family_name, Author.first_name)),
        "genres": store.find(Genre, sort=(Genre.name,)),
        "errors": form.field_errors(),
    })


def _delete_page(book, book_instances):
    return Render("book_delete.html", {
        "title": "Delete Book",
        "book": book,
        "book_instances": book_instances,
    })


def _validated_values(store, form):
    """Validate the form and resolve its references. Returns the record values or ``None``."""
    if not form.validate():
        return None

    values = form.cleaned()
    author = integrity.resolve_author(store, values["author"])
    if author is None:
        form.add_error("author", "Author not found")
    genres, missing = integrity.resolve_genres(store, values["genre"])
    if missing:
        form.add_error("genre", "Genre not found")
    if author is None or missing:
        return None

    return {
        "title": values["title"],
        "author": author,
        "summary": values["summary"],
        "isbn": values["isbn"],
        "genres": genres,
    }


def book_list(store):
    books = store.find(Book, sort=(Book.title,), populate=("author",))
    return Render("book_list.html", {"title": "Book List", "book_list": books})


def book_detail(store, book_id):
    book = store.get(Book, book_id, populate=("author", "genres"))
    if book is None:
        return not_found("Book")
    book_instances = integrity.find_dependents(store, Book, book.id)
    return Render("book_detail.html", {
        # Stored titles are already escaped
        "title": Markup(book.title),
        "book": book,
        "book_instances": book_instances,
    })


def book_create_get(store):
    return _form_page(store, "Create Book", BookForm())


def book_create_post(store, formdata):
    form = BookForm(formdata)
    values = _validated_values(store, form)
    if values is None:
        return _form_page(store, "Create Book", form)

    existing = integrity.find_duplicate(store, Book, values["isbn"])
    if existing is not None:
        return Redirect(existing.url)

    book = store.create(Book(**values))
    return Redirect(book.url)


def book_delete_get(store, book_id):
    book = store.get(Book, book_id, populate=("author",))
    if book is None:
        return Redirect(Book.list_url)
    return _delete_page(book, integrity.find_dependents(store, Book, book.id))


def book_delete_post(store, book_id, formdata):
    result = integrity.delete_unreferenced(store, Book, formdata.get("bookid"))
    if result.blocked:
        return _delete_page(result.record, result.dependents)
    return Redirect(Book.list_url)


def book_update_get(store, book_id):
    book = store.get(Book, book_id, populate=("author", "genres"))
    if book is None:
        return not_found("Book")
    return _form_page(store, "Update Book", BookForm.from_record(book), book)


def book_update_post(store, book_id, formdata):
    book = store.get(Book, book_id)
    if book is None:
        return not_found("Book")

    form = BookForm(formdata)
    values = _validated_values(store, form)
    if values is None:
        return _form_page(store, "Update Book", form, book)

    existing = integrity.find_duplicate(store, Book, values["isbn"], exclude_id=book.id)
    if existing is not None:
        return Redirect(existing.url)

    book = store.update(Book, book.id, values)
    return Redirect(book.url)
