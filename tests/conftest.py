"""Pytest configuration and shared fixtures."""

import os

# must be set before bookdb.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bookdb.models import Author, Base, Book, BookGenre, Format, Genre


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def library(db) -> dict:
    """Lookup rows plus one book; inactive rows are marked in the names."""
    austen = Author(name="Jane Austen", country="England", birthdate=date(1775, 12, 16), is_active=True)
    bronte = Author(name="Charlotte Bronte", country="England", is_active=True)
    retired = Author(name="Retired Author", is_active=False)

    paperback = Format(name="Paperback", is_active=True)
    hardcover = Format(name="Hardcover", is_active=True)

    fiction = Genre(name="Fiction", is_active=True)
    romance = Genre(name="Romance", is_active=True)
    classics = Genre(name="Classics", is_active=True)
    satire = Genre(name="Satire", is_active=True)
    history = Genre(name="History", is_active=False)

    db.add_all([austen, bronte, retired, paperback, hardcover, fiction, romance, classics, satire, history])
    db.flush()

    emma = Book(title="Emma", isbn="111", year=1815, pages=474, author_id=austen.id, format_id=paperback.id)
    db.add(emma)
    db.flush()
    db.add_all([
        BookGenre(book_id=emma.id, genre_id=fiction.id),
        BookGenre(book_id=emma.id, genre_id=romance.id),
        BookGenre(book_id=emma.id, genre_id=classics.id),
    ])
    db.commit()

    return {
        "austen": austen,
        "bronte": bronte,
        "retired": retired,
        "paperback": paperback,
        "hardcover": hardcover,
        "fiction": fiction,
        "romance": romance,
        "classics": classics,
        "satire": satire,
        "history": history,
        "emma": emma,
    }


@pytest.fixture
def book_params(library) -> dict:
    """A complete, valid submission for a new book."""
    return {
        "title": "Persuasion",
        "author": str(library["austen"].id),
        "isbn": "222",
        "publisher": "John Murray",
        "year": "1817",
        "pages": "249",
        "format": str(library["hardcover"].id),
        "genres": [str(library["fiction"].id), str(library["romance"].id)],
        "borrowed_time": "",
    }
