from locallibrary import integrity
from locallibrary.models import Author, Book, BookInstance, Genre


def test_find_dependents(store, author, genre, book, bookinstance):
    assert integrity.find_dependents(store, Genre, genre.id) == [book]
    assert integrity.find_dependents(store, Author, author.id) == [book]
    assert integrity.find_dependents(store, Book, book.id) == [bookinstance]
    assert integrity.find_dependents(store, BookInstance, bookinstance.id) == []


def test_find_dependents_with_unusable_id(store, book):
    assert integrity.find_dependents(store, Author, "not-an-id") == []
    assert integrity.find_dependents(store, Author, None) == []


def test_delete_blocked_while_referenced(store, author, book):
    result = integrity.delete_unreferenced(store, Author, author.id)

    assert result.blocked
    assert not result.deleted
    assert result.record is author
    assert result.dependents == [book]
    assert store.count(Author) == 1
    assert store.count(Book) == 1


def test_delete_genre_blocked_while_a_book_uses_it(store, genre, book):
    result = integrity.delete_unreferenced(store, Genre, str(genre.id))
    assert result.blocked
    assert result.dependents == [book]
    assert store.get(Genre, genre.id) is genre


def test_delete_book_blocked_while_copies_exist(store, book, bookinstance):
    result = integrity.delete_unreferenced(store, Book, book.id)
    assert result.dependents == [bookinstance]
    assert store.count(Book) == 1


def test_delete_unreferenced_removes_exactly_one_record(store, author):
    store.create(Genre(name="Fantasy"))
    target = store.create(Genre(name="Poetry"))

    result = integrity.delete_unreferenced(store, Genre, target.id)

    assert result.deleted
    assert result.dependents == []
    assert [g.name for g in store.find(Genre)] == ["Fantasy"]
    assert store.count(Author) == 1


def test_delete_book_without_copies_keeps_its_genres(store, genre, book):
    result = integrity.delete_unreferenced(store, Book, book.id)
    assert result.deleted
    assert store.count(Book) == 0
    assert store.count(Genre) == 1


def test_delete_missing_record(store):
    result = integrity.delete_unreferenced(store, Genre, 999)
    assert not result.found
    assert not result.blocked
    assert not result.deleted


def test_find_duplicate_genre_ignores_case(store, genre):
    assert integrity.find_duplicate(store, Genre, "science fiction") is genre
    assert integrity.find_duplicate(store, Genre, "SCIENCE FICTION") is genre
    assert integrity.find_duplicate(store, Genre, "Fantasy") is None
    assert integrity.find_duplicate(store, Genre, "") is None


def test_find_duplicate_skips_the_record_being_updated(store, genre):
    assert integrity.find_duplicate(store, Genre, "Science fiction", exclude_id=genre.id) is None


def test_find_duplicate_book_by_isbn(store, book):
    assert integrity.find_duplicate(store, Book, "9780553293357") is book
    assert integrity.find_duplicate(store, Book, "0000000000") is None


def test_resolve_genres(store, genre):
    other = store.create(Genre(name="Fantasy"))
    genres, missing = integrity.resolve_genres(store, [str(genre.id), str(other.id), str(genre.id), "42", "x"])
    assert genres == [genre, other]
    assert missing == ["42", "x"]


def test_resolve_author_and_book(store, author, book):
    assert integrity.resolve_author(store, str(author.id)) is author
    assert integrity.resolve_author(store, "999") is None
    assert integrity.resolve_book(store, str(book.id)) is book
    assert integrity.resolve_book(store, "") is None


def test_find_duplicate_folds_non_ascii_case(store):
    genre = store.create(Genre(name="Ästhetik"))
    assert integrity.find_duplicate(store, Genre, "ÄSTHETIK") is genre
    assert integrity.find_duplicate(store, Genre, "ästhetik") is genre


def test_find_duplicate_follows_renamed_genre(store, genre):
    store.update(Genre, genre.id, {"name": "Straße"})
    assert integrity.find_duplicate(store, Genre, "STRASSE") is genre
    assert integrity.find_duplicate(store, Genre, "Science Fiction") is None


def test_find_duplicate_isbn_ignores_case(store, author):
    book = store.create(Book(title="Test", author=author, summary="x", isbn="ISBN111111"))
    assert integrity.find_duplicate(store, Book, "isbn111111") is book
