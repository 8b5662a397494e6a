# bookdb/forms/author.py
from bookdb.form_processor import ModelForm
from bookdb.models import Author


class AuthorForm(ModelForm):
    model = Author
    profile = {
        "fields": {
            "name": {"type": "Text", "required": True, "size": 255, "minlength": 2},
            "country": "Text",
            "birthdate": "Date",
            "is_active": "Boolean",
        },
    }
