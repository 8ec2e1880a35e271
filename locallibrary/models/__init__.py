"""ORM Models: SQLAlchemy declarative models for the catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Reference columns (Book.author_id, BookGenre.genre_id, BookInstance.book_id)
      carry no FK constraint to their referent

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from locallibrary.models.author import Author  # noqa: F401
from locallibrary.models.genre import Genre  # noqa: F401
from locallibrary.models.book import Book, BookGenre, build_genre_links  # noqa: F401
from locallibrary.models.book_instance import BookInstance  # noqa: F401
