# File: bookdb/models/__init__.py
from .base import Base
from .author import Author
from .format import Format
from .genre import Genre
from .book import Book
from .book_genre import BookGenre

__all__ = [
    "Base",
    "Author",
    "Format",
    "Genre",
    "Book",
    "BookGenre",
]
