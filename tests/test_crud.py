"""Tests for the transactional form submission helper."""

import pytest
from sqlalchemy.exc import IntegrityError

from bookdb.crud.forms import submit_form
from bookdb.form_processor import ModelForm
from bookdb.forms import BookForm
from bookdb.models import Book, Format


class FormatForm(ModelForm):
    """No unique entry, so a duplicate name reaches the database."""
    model = Format
    profile = {"required": {"name": "Text"}}


def test_commits_valid_submission(db, book_params, library):
    book = submit_form(db, BookForm(db), book_params)

    assert book is not None
    db.expunge_all()
    assert db.get(Book, book.id).title == "Persuasion"


def test_rolls_back_invalid_submission(db, book_params, library):
    book_params["title"] = ""

    assert submit_form(db, BookForm(db), book_params) is None
    assert not db.new
    assert db.query(Book).count() == 1


def test_storage_error_rolls_back_and_raises(db, library):
    with pytest.raises(IntegrityError):
        submit_form(db, FormatForm(db), {"name": "Paperback"})

    assert not db.new
    assert not db.dirty
    assert db.query(Format).count() == 2
    # the session is usable again
    assert submit_form(db, FormatForm(db), {"name": "Ebook"}) is not None
    assert db.query(Format).count() == 3
