from .. import integrity
from ..forms import AuthorForm
from ..models import Author
from . import Redirect, Render, not_found


def _form_page(title, form, author=None):
    return Render("author_form.html", {
        "title": title,
        "author": author,
        "form": form,
        "errors": form.field_errors(),
    })


def _delete_page(author, books):
    return Render("author_delete.html", {
        "title": "Delete Author",
        "author": author,
        "author_books": books,
    })


def author_list(store):
    authors = store.find(Author, sort=(Author.family_name, Author.first_name))
    return Render("author_list.html", {"title": "Author List", "author_list": authors})


def author_detail(store, author_id):
    author = store.get(Author, author_id)
    if author is None:
        return not_found("Author")
    books = integrity.find_dependents(store, Author, author.id)
    return Render("author_detail.html", {
        "title": "Author Detail",
        "author": author,
        "author_books": books,
    })


def author_create_get(store):
    return _form_page("Create Author", AuthorForm())


def author_create_post(store, formdata):
    form = AuthorForm(formdata)
    if not form.validate():
        return _form_page("Create Author", form)

    author = store.create(Author(**form.cleaned()))
    return Redirect(author.url)


def author_delete_get(store, author_id):
    author = store.get(Author, author_id)
    if author is None:
        return Redirect(Author.list_url)
    return _delete_page(author, integrity.find_dependents(store, Author, author.id))


def author_delete_post(store, author_id, formdata):
    result = integrity.delete_unreferenced(store, Author, formdata.get("authorid"))
    if result.blocked:
        return _delete_page(result.record, result.dependents)
    return Redirect(Author.list_url)


def author_update_get(store, author_id):
    author = store.get(Author, author_id)
    if author is None:
        return not_found("Author")
    return _form_page("Update Author", AuthorForm.from_record(author), author)


def author_update_post(store, author_id, formdata):
    author = store.get(Author, author_id)
    if author is None:
        return not_found("Author")

    form = AuthorForm(formdata)
    if not form.validate():
        return _form_page("Update Author", form, author)

    author = store.update(Author, author.id, form.cleaned())
    return Redirect(author.url)
