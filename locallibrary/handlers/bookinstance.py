from datetime import date

from .. import integrity
from ..forms import BookInstanceForm
from ..models import BOOK_INSTANCE_STATUSES, Book, BookInstance
from . import Redirect, Render, not_found


def _form_page(store, title, form, bookinstance=None):
    return Render("bookinstance_form.html", {
        "title": title,
        "bookinstance": bookinstance,
        "form": form,
        "book_list": store.find(Book, sort=(Book.title,)),
        "statuses": BOOK_INSTANCE_STATUSES,
        "errors": form.field_errors(),
    })


def _validated_values(store, form):
    if not form.validate():
        return None

    values = form.cleaned()
    book = integrity.resolve_book(store, values["book"])
    if book is None:
        form.add_error("book", "Book not found")
        return None

    return {
        "book": book,
        "imprint": values["imprint"],
        "status": values["status"],
        "due_back": values["due_back"] or date.today(),
    }


def bookinstance_list(store):
    bookinstances = store.find(BookInstance, sort=(BookInstance.id,), populate=("book",))
    return Render("bookinstance_list.html", {
        "title": "Book Instance List",
        "bookinstance_list": bookinstances,
    })


def bookinstance_detail(store, bookinstance_id):
    bookinstance = store.get(BookInstance, bookinstance_id, populate=("book",))
    if bookinstance is None:
        return not_found("Book copy")
    return Render("bookinstance_detail.html", {
        "title": "Book:",
        "bookinstance": bookinstance,
    })


def bookinstance_create_get(store):
    return _form_page(store, "Create BookInstance", BookInstanceForm())


def bookinstance_create_post(store, formdata):
    form = BookInstanceForm(formdata)
    values = _validated_values(store, form)
    if values is None:
        return _form_page(store, "Create BookInstance", form)

    bookinstance = store.create(BookInstance(**values))
    return Redirect(bookinstance.url)


def bookinstance_delete_get(store, bookinstance_id):
    bookinstance = store.get(BookInstance, bookinstance_id, populate=("book",))
    if bookinstance is None:
        return Redirect(BookInstance.list_url)
    return Render("bookinstance_delete.html", {
        "title": "Delete Book Instance",
        "bookinstance": bookinstance,
    })


def bookinstance_delete_post(store, bookinstance_id, formdata):
    # Nothing references a copy, so this never blocks
    integrity.delete_unreferenced(store, BookInstance, formdata.get("bookinstanceid"))
    return Redirect(BookInstance.list_url)


def bookinstance_update_get(store, bookinstance_id):
    bookinstance = store.get(BookInstance, bookinstance_id, populate=("book",))
    if bookinstance is None:
        return not_found("Book copy")
    return _form_page(store, "Update Book Instance", BookInstanceForm.from_record(bookinstance), bookinstance)


def bookinstance_update_post(store, bookinstance_id, formdata):
    bookinstance = store.get(BookInstance, bookinstance_id)
    if bookinstance is None:
        return not_found("Book copy")

    form = BookInstanceForm(formdata)
    values = _validated_values(store, form)
    if values is None:
        return _form_page(store, "Update Book Instance", form, bookinstance)

    bookinstance = store.update(BookInstance, bookinstance.id, values)
    return Redirect(bookinstance.url)
