# bookdb/forms/book.py
from bookdb.form_processor import ModelForm
from bookdb.models import Book


class BookForm(ModelForm):
    model = Book
    active_column = "is_active"
    profile = {
        "required": {
            "title": {"type": "Text", "size": 255},
            "author": "Select",
        },
        "optional": {
            "isbn": {"type": "Text", "size": 20},
            "publisher": "Text",
            "year": {"type": "Integer", "range_start": 1000, "range_end": 2100},
            "pages": "PosInteger",
            "format": "Select",
            "genres": "Multiple",
        },
        "auto_optional": ["borrowed_time"],
        "unique": {"isbn": "Duplicate ISBN number"},
    }
    unique_excludes_item = True
