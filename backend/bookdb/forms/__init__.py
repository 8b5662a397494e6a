# bookdb/forms/__init__.py
from .author import AuthorForm
from .book import BookForm

__all__ = ["AuthorForm", "BookForm"]
