"""Tests for schema creation and lookup seeding."""

from bookdb.initialization import DEFAULT_FORMATS, DEFAULT_GENRES, ApplicationInitializer
from bookdb.models import Format, Genre


def test_seeds_empty_lookup_tables(engine, db):
    initializer = ApplicationInitializer(bind=engine)
    status = initializer.initialize_database(db)

    assert status["database_ready"] is True
    assert status["seeded"] == {"formats": len(DEFAULT_FORMATS), "genres": len(DEFAULT_GENRES)}
    assert db.query(Genre).filter(Genre.is_active.is_(True)).count() == len(DEFAULT_GENRES)

    summary = initializer.get_initialization_summary(db)
    assert summary["database"]["row_counts"]["formats"] == len(DEFAULT_FORMATS)
    assert "books_genres" in summary["database"]["tables"]


def test_existing_rows_are_left_alone(engine, db, library):
    status = ApplicationInitializer(bind=engine).initialize_database(db)

    assert status["seeded"] == {"formats": 0, "genres": 0}
    assert db.query(Format).count() == 2
