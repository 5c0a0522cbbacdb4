from .. import integrity
from ..forms import GenreForm
from ..models import Genre
from . import Redirect, Render, not_found


def _form_page(title, form, genre=None):
    return Render("genre_form.html", {
        "title": title,
        "genre": genre,
        "form": form,
        "errors": form.field_errors(),
    })


def _delete_page(genre, books):
    return Render("genre_delete.html", {
        "title": "Delete Genre",
        "genre": genre,
        "genre_books": books,
    })


def genre_list(store):
    genres = store.find(Genre, sort=(Genre.name,))
    return Render("genre_list.html", {"title": "Genre List", "genre_list": genres})


def genre_detail(store, genre_id):
    genre = store.get(Genre, genre_id)
    if genre is None:
        return not_found("Genre")
    books = integrity.find_dependents(store, Genre, genre.id)
    return Render("genre_detail.html", {
        "title": "Genre Detail",
        "genre": genre,
        "genre_books": books,
    })


def genre_create_get(store):
    return _form_page("Create Genre", GenreForm())


def genre_create_post(store, formdata):
    form = GenreForm(formdata)
    if not form.validate():
        return _form_page("Create Genre", form)

    values = form.cleaned()
    existing = integrity.find_duplicate(store, Genre, values["name"])
    if existing is not None:
        return Redirect(existing.url)

    genre = store.create(Genre(name=values["name"]))
    return Redirect(genre.url)


def genre_delete_get(store, genre_id):
    genre = store.get(Genre, genre_id)
    if genre is None:
        return Redirect(Genre.list_url)
    return _delete_page(genre, integrity.find_dependents(store, Genre, genre.id))


def genre_delete_post(store, genre_id, formdata):
    # The record to delete comes from the confirmation form, not the path
    result = integrity.delete_unreferenced(store, Genre, formdata.get("genreid"))
    if result.blocked:
        return _delete_page(result.record, result.dependents)
    return Redirect(Genre.list_url)


def genre_update_get(store, genre_id):
    genre = store.get(Genre, genre_id)
    if genre is None:
        return not_found("Genre")
    return _form_page("Update Genre", GenreForm.from_record(genre), genre)


def genre_update_post(store, genre_id, formdata):
    genre = store.get(Genre, genre_id)
    if genre is None:
        return not_found("Genre")

    form = GenreForm(formdata)
    if not form.validate():
        return _form_page("Update Genre", form, genre)

    values = form.cleaned()
    existing = integrity.find_duplicate(store, Genre, values["name"], exclude_id=genre.id)
    if existing is not None:
        return Redirect(existing.url)

    genre = store.update(Genre, genre.id, {"name": values["name"]})
    return Redirect(genre.url)
