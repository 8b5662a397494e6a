"""Tests for relationship classification and many-to-many resolution."""

from datetime import datetime

import pytest
from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import DeclarativeBase, relationship

from bookdb.form_processor import (
    ManyToManyError,
    MappedSource,
    RelationKind,
    classify,
    guess_field_type,
    many_to_many,
)
from bookdb.models import Author, Book, BookGenre, Genre


class StubSource:
    """Minimal schema source for shapes SQLAlchemy cannot express directly."""

    def __init__(self, columns=None, single=None, multi=None):
        self.columns = columns or {}
        self.single = single or {}
        self.multi = multi or {}

    def has_column(self, name):
        return name in self.columns

    def column_python_type(self, name):
        return self.columns.get(name)

    def accessor(self, name):
        if name in self.single:
            return "single"
        if name in self.multi:
            return "multi"
        return None

    def related_class(self, name):
        return self.single.get(name) or self.multi.get(name)

    def storage_column(self, name):
        if name in self.columns:
            return name
        return f"{name}_id" if name in self.single else None


# Mapping table shapes that are not supported
class OtherBase(DeclarativeBase):
    pass


class Shelf(OtherBase):
    __tablename__ = "shelves"
    id = Column(Integer, primary_key=True)
    name = Column(String)
    placements = relationship("Placement", back_populates="shelf")
    labels = relationship("Label", secondary="shelf_labels")


class Volume(OtherBase):
    __tablename__ = "volumes"
    id = Column(Integer, primary_key=True)
    name = Column(String)


class Placement(OtherBase):
    __tablename__ = "placements"
    shelf_id = Column(Integer, ForeignKey("shelves.id"), primary_key=True)
    volume_id = Column(Integer, ForeignKey("volumes.id"), primary_key=True)
    position = Column(Integer)
    shelf = relationship("Shelf", back_populates="placements")
    volume = relationship("Volume")


class Label(OtherBase):
    __tablename__ = "labels"
    id = Column(Integer, primary_key=True)
    name = Column(String)


shelf_labels = Table(
    "shelf_labels",
    OtherBase.metadata,
    Column("shelf_id", ForeignKey("shelves.id"), primary_key=True),
    Column("label_id", ForeignKey("labels.id"), primary_key=True),
)


@pytest.fixture
def book_source():
    return MappedSource(Book)


class TestClassify:
    def test_plain_column(self, book_source):
        desc = classify(book_source, "title")
        assert desc.kind is RelationKind.COLUMN
        assert desc.storage_column == "title"
        assert not desc.temporal

    def test_to_one_stores_through_foreign_key(self, book_source):
        desc = classify(book_source, "author")
        assert desc.kind is RelationKind.TO_ONE
        assert desc.related_class is Author
        assert desc.storage_column == "author_id"

    def test_to_many(self, book_source):
        desc = classify(book_source, "genres")
        assert desc.kind is RelationKind.TO_MANY
        assert desc.related_class is BookGenre
        assert desc.storage_column is None

    def test_unknown_name(self, book_source):
        assert classify(book_source, "no_such_thing").kind is RelationKind.UNKNOWN

    def test_datetime_column_is_temporal(self, book_source):
        assert classify(book_source, "borrowed_time").temporal


class TestGuessFieldType:
    def test_mapped_model(self, book_source):
        assert guess_field_type(book_source, "author") == "Select"
        assert guess_field_type(book_source, "format") == "Select"
        assert guess_field_type(book_source, "genres") == "Multiple"
        assert guess_field_type(book_source, "borrowed_time") == "DateTime"
        assert guess_field_type(book_source, "title") == "Text"
        assert guess_field_type(book_source, "year") == "Text"

    def test_date_column_is_date(self):
        assert guess_field_type(MappedSource(Author), "birthdate") == "Date"

    def test_to_one_temporal_class(self):
        source = StubSource(single={"published": datetime})
        assert guess_field_type(source, "published") == "DateTime"

    def test_to_one_entity(self):
        source = StubSource(single={"owner": Author})
        assert guess_field_type(source, "owner") == "Select"

    def test_to_many(self):
        source = StubSource(multi={"tags": Genre})
        assert guess_field_type(source, "tags") == "Multiple"

    def test_time_suffix_without_relationship(self):
        source = StubSource(columns={"start_time": str})
        assert guess_field_type(source, "start_time") == "DateTime"

    def test_default_text(self):
        source = StubSource(columns={"notes": str})
        assert guess_field_type(source, "notes") == "Text"
        assert guess_field_type(source, "anything") == "Text"


class TestManyToMany:
    def test_book_genres(self, book_source):
        m2m = many_to_many(book_source, "genres")
        assert m2m.self_rel == "book"
        assert m2m.self_col == "book_id"
        assert m2m.foreign_rel == "genre"
        assert m2m.foreign_col == "genre_id"
        assert m2m.origin_col == "id"
        assert m2m.junction is BookGenre

    def test_related_source_of_foreign_rel_is_genre(self, book_source):
        m2m = many_to_many(book_source, "genres")
        assert MappedSource(m2m.junction).related_class(m2m.foreign_rel) is Genre

    def test_extra_column_on_mapping_table(self):
        with pytest.raises(ManyToManyError, match="3 columns"):
            many_to_many(MappedSource(Shelf), "placements")

    def test_secondary_table(self):
        with pytest.raises(ManyToManyError, match="secondary"):
            many_to_many(MappedSource(Shelf), "labels")

    def test_not_a_collection(self, book_source):
        with pytest.raises(ManyToManyError):
            many_to_many(book_source, "author")
