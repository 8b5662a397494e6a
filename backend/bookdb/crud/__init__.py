# bookdb/crud/__init__.py
from . import author, book
from .forms import submit_form

__all__ = ["author", "book", "submit_form"]
