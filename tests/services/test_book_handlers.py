"""Book Handlers: verifies create/update with genre links and form options."""

from uuid import uuid4

import pytest

from locallibrary.core.errors import ResourceNotFoundError
from locallibrary.models.author import Author
from locallibrary.models.book import Book
from locallibrary.models.book_instance import BookInstance
from locallibrary.models.genre import Genre
from locallibrary.services.book_handlers import BookHandlers
from locallibrary.services.outcomes import Redirect, Rendered


@pytest.fixture
async def catalog(store):
    author = await store.insert(Author(first_name="Frank", family_name="Herbert"))
    scifi = await store.insert(Genre(name="Science Fiction"))
    epic = await store.insert(Genre(name="Epic"))
    return {"author": author, "scifi": scifi, "epic": epic}


def _fields(catalog, **overrides):
    fields = {
        "title": "Dune",
        "author": str(catalog["author"].id),
        "summary": "Spice.",
        "isbn": "9780441013593",
        "genre": [str(catalog["scifi"].id)],
    }
    fields.update(overrides)
    return fields


async def test_create_book_with_genres(store, catalog):
    outcome = await BookHandlers(store).create(_fields(catalog))

    books = await store.find(Book)
    assert len(books) == 1
    assert [link.genre_id for link in books[0].genre_links] == [catalog["scifi"].id]
    assert outcome == Redirect(f"/catalog/book/{books[0].id}")


async def test_create_invalid_rerenders_with_options(store, catalog):
    outcome = await BookHandlers(store).create(_fields(catalog, title=""))

    assert isinstance(outcome, Rendered)
    assert outcome.view == "book_form"
    assert [a["name"] for a in outcome.context["authors"]] == ["Herbert, Frank"]
    checked = {g["name"]: g["checked"] for g in outcome.context["genres"]}
    assert checked == {"Epic": False, "Science Fiction": True}
    assert outcome.context["errors"][0]["msg"] == "Title must not be empty."
    assert await store.count(Book) == 0


async def test_update_replaces_genres_and_keeps_id(store, catalog):
    await BookHandlers(store).create(_fields(catalog))
    book = (await store.find(Book))[0]

    outcome = await BookHandlers(store).update(
        str(book.id),
        _fields(catalog, title="Dune Messiah", genre=[str(catalog["epic"].id)]),
    )

    assert outcome == Redirect(f"/catalog/book/{book.id}")
    reloaded = await store.find_by_id(Book, book.id)
    assert reloaded.title == "Dune Messiah"
    assert [link.genre_id for link in reloaded.genre_links] == [catalog["epic"].id]


async def test_update_missing_book(store, catalog):
    with pytest.raises(ResourceNotFoundError):
        await BookHandlers(store).update(str(uuid4()), _fields(catalog))


async def test_detail_resolves_author_genres_and_copies(store, catalog):
    await BookHandlers(store).create(_fields(catalog))
    book = (await store.find(Book))[0]
    await store.insert(BookInstance(book_id=book.id, imprint="Ace"))

    outcome = await BookHandlers(store).detail(str(book.id))

    ctx = outcome.context
    assert ctx["title"] == "Dune"
    assert ctx["book"]["author"]["name"] == "Herbert, Frank"
    assert [g["name"] for g in ctx["book"]["genres"]] == ["Science Fiction"]
    assert [i["imprint"] for i in ctx["book_instances"]] == ["Ace"]


async def test_delete_removes_book(store, catalog):
    await BookHandlers(store).create(_fields(catalog))
    book = (await store.find(Book))[0]

    outcome = await BookHandlers(store).delete({"bookid": str(book.id)})

    assert outcome == Redirect("/catalog/books")
    assert await store.count(Book) == 0
