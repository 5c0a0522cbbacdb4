"""
HTTP routes for the catalog.

Every route hands the store and the request data to a handler and turns the
returned outcome into a Flask response.
"""

from flask import Blueprint, abort, current_app, redirect, render_template, request, url_for

from .handlers import Failure, Redirect, Render, author, book, bookinstance, genre, index

catalog = Blueprint("catalog", __name__, url_prefix="/catalog")


def get_store():
    return current_app.extensions["catalog_store"]


def respond(outcome):
    if isinstance(outcome, Redirect):
        return redirect(outcome.url)
    if isinstance(outcome, Failure):
        abort(outcome.status, description=outcome.message)
    if isinstance(outcome, Render):
        return render_template(outcome.template, **outcome.context)
    raise TypeError(f"Unknown handler outcome: {outcome!r}")


@catalog.route("/")
def catalog_index():
    return respond(index(get_store()))


# ----- Books -----
@catalog.route("/books")
def book_list():
    return respond(book.book_list(get_store()))


@catalog.route("/book/create", methods=["GET", "POST"])
def book_create():
    if request.method == "POST":
        return respond(book.book_create_post(get_store(), request.form))
    return respond(book.book_create_get(get_store()))


@catalog.route("/book/<int:book_id>")
def book_detail(book_id):
    return respond(book.book_detail(get_store(), book_id))


@catalog.route("/book/<int:book_id>/delete", methods=["GET", "POST"])
def book_delete(book_id):
    if request.method == "POST":
        return respond(book.book_delete_post(get_store(), book_id, request.form))
    return respond(book.book_delete_get(get_store(), book_id))


@catalog.route("/book/<int:book_id>/update", methods=["GET", "POST"])
def book_update(book_id):
    if request.method == "POST":
        return respond(book.book_update_post(get_store(), book_id, request.form))
    return respond(book.book_update_get(get_store(), book_id))


# ----- Authors -----
@catalog.route("/authors")
def author_list():
    return respond(author.author_list(get_store()))


@catalog.route("/author/create", methods=["GET", "POST"])
def author_create():
    if request.method == "POST":
        return respond(author.author_create_post(get_store(), request.form))
    return respond(author.author_create_get(get_store()))


@catalog.route("/author/<int:author_id>")
def author_detail(author_id):
    return respond(author.author_detail(get_store(), author_id))


@catalog.route("/author/<int:author_id>/delete", methods=["GET", "POST"])
def author_delete(author_id):
    if request.method == "POST":
        return respond(author.author_delete_post(get_store(), author_id, request.form))
    return respond(author.author_delete_get(get_store(), author_id))


@catalog.route("/author/<int:author_id>/update", methods=["GET", "POST"])
def author_update(author_id):
    if request.method == "POST":
        return respond(author.author_update_post(get_store(), author_id, request.form))
    return respond(author.author_update_get(get_store(), author_id))


# ----- Genres -----
@catalog.route("/genres")
def genre_list():
    return respond(genre.genre_list(get_store()))


@catalog.route("/genre/create", methods=["GET", "POST"])
def genre_create():
    if request.method == "POST":
        return respond(genre.genre_create_post(get_store(), request.form))
    return respond(genre.genre_create_get(get_store()))


@catalog.route("/genre/<int:genre_id>")
def genre_detail(genre_id):
    return respond(genre.genre_detail(get_store(), genre_id))


@catalog.route("/genre/<int:genre_id>/delete", methods=["GET", "POST"])
def genre_delete(genre_id):
    if request.method == "POST":
        return respond(genre.genre_delete_post(get_store(), genre_id, request.form))
    return respond(genre.genre_delete_get(get_store(), genre_id))


@catalog.route("/genre/<int:genre_id>/update", methods=["GET", "POST"])
def genre_update(genre_id):
    if request.method == "POST":
        return respond(genre.genre_update_post(get_store(), genre_id, request.form))
    return respond(genre.genre_update_get(get_store(), genre_id))


# ----- Book instances (copies) -----
@catalog.route("/bookinstances")
def bookinstance_list():
    return respond(bookinstance.bookinstance_list(get_store()))


@catalog.route("/bookinstance/create", methods=["GET", "POST"])
def bookinstance_create():
    if request.method == "POST":
        return respond(bookinstance.bookinstance_create_post(get_store(), request.form))
    return respond(bookinstance.bookinstance_create_get(get_store()))


@catalog.route("/bookinstance/<int:bookinstance_id>")
def bookinstance_detail(bookinstance_id):
    return respond(bookinstance.bookinstance_detail(get_store(), bookinstance_id))


@catalog.route("/bookinstance/<int:bookinstance_id>/delete", methods=["GET", "POST"])
def bookinstance_delete(bookinstance_id):
    if request.method == "POST":
        return respond(bookinstance.bookinstance_delete_post(get_store(), bookinstance_id, request.form))
    return respond(bookinstance.bookinstance_delete_get(get_store(), bookinstance_id))


@catalog.route("/bookinstance/<int:bookinstance_id>/update", methods=["GET", "POST"])
def bookinstance_update(bookinstance_id):
    if request.method == "POST":
        return respond(bookinstance.bookinstance_update_post(get_store(), bookinstance_id, request.form))
    return respond(bookinstance.bookinstance_update_get(get_store(), bookinstance_id))


def register_routes(app):
    app.register_blueprint(catalog)

    @app.route("/")
    def home():
        return redirect(url_for("catalog.catalog_index"))
