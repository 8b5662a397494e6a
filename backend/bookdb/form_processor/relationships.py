# bookdb/form_processor/relationships.py
"""
Relationship classification and many-to-many resolution.

A field name on a form is one of: a plain column, a to-one relationship
(stored through a foreign key column), or a to-many relationship backed by a
mapping table. The descriptor is computed once when the field is built and
cached on it.
"""

import enum
from datetime import date, datetime
from typing import NamedTuple, Optional

from sqlalchemy.orm import RelationshipDirection

from bookdb.form_processor.errors import ManyToManyError
from bookdb.form_processor.source import MULTI, SINGLE, MappedSource, SchemaSource

TIME_SUFFIX = "_time"


class RelationKind(str, enum.Enum):
    COLUMN = "column"
    TO_ONE = "to_one"
    TO_MANY = "to_many"
    UNKNOWN = "unknown"


class RelationshipDescriptor(NamedTuple):
    name: str
    kind: RelationKind
    related_class: Optional[type] = None
    temporal: bool = False
    storage_column: Optional[str] = None


class ManyToManyDescriptor(NamedTuple):
    self_rel: str        # junction -> origin
    self_col: str        # junction column holding the origin key
    foreign_rel: str     # junction -> foreign table
    foreign_col: str     # junction column holding the foreign key
    origin_col: str      # origin column referenced by self_col
    junction: type


def classify(source: SchemaSource, name: str) -> RelationshipDescriptor:
    """Classify a field name against the schema. Pure function of the metadata."""
    accessor = source.accessor(name)
    if accessor == SINGLE:
        related = source.related_class(name)
        return RelationshipDescriptor(
            name=name,
            kind=RelationKind.TO_ONE,
            related_class=related,
            temporal=isinstance(related, type) and issubclass(related, date),
            storage_column=source.storage_column(name),
        )
    if accessor == MULTI:
        return RelationshipDescriptor(
            name=name,
            kind=RelationKind.TO_MANY,
            related_class=source.related_class(name),
        )
    if source.has_column(name):
        py_type = source.column_python_type(name)
        return RelationshipDescriptor(
            name=name,
            kind=RelationKind.COLUMN,
            temporal=py_type is not None and issubclass(py_type, date),
            storage_column=name,
        )
    return RelationshipDescriptor(name=name, kind=RelationKind.UNKNOWN)


def guess_field_type(source: SchemaSource, name: str) -> str:
    """
    Guess a field type for an "auto" field.

    DateTime  - to-one relationship to a temporal class, or a datetime column
    Date      - date columns
    Select    - other to-one relationships
    Multiple  - to-many relationships
    DateTime  - names ending in _time
    Text      - everything else
    """
    desc = classify(source, name)
    if desc.kind is RelationKind.TO_ONE:
        return "DateTime" if desc.temporal else "Select"
    if desc.kind is RelationKind.TO_MANY:
        return "Multiple"
    if desc.temporal:
        py_type = source.column_python_type(name)
        return "DateTime" if issubclass(py_type, datetime) else "Date"
    if name.endswith(TIME_SUFFIX):
        return "DateTime"
    return "Text"


def many_to_many(source: MappedSource, has_many_rel: str) -> ManyToManyDescriptor:
    """
    Resolve the mapping table behind a has_many relationship.

    The mapping class must have exactly two columns and two relationships:
    one pointing back to the origin class, the other to the foreign class.
    Relationships declared with ``secondary=`` are not supported.

    Needs the SQLAlchemy relationship properties and mappers, so it takes a
    MappedSource rather than any SchemaSource.
    """
    if source.accessor(has_many_rel) != MULTI:
        raise ManyToManyError(has_many_rel, "not a to-many relationship")

    rel = source.relationship(has_many_rel)
    if rel.secondary is not None:
        raise ManyToManyError(has_many_rel, "secondary association tables are not supported")

    junction = source.related_source(has_many_rel)
    columns = junction.column_names()
    rel_names = junction.relationship_names()
    if len(columns) != 2 or len(rel_names) != 2:
        raise ManyToManyError(
            has_many_rel,
            f"mapping table {junction.model.__name__} has {len(columns)} columns "
            f"and {len(rel_names)} relationships, expected 2 and 2",
        )

    # reverse relationship: the junction's to-one pointing back at the origin
    back = [
        name for name in rel_names
        if junction.relationship(name).direction is RelationshipDirection.MANYTOONE
        and issubclass(source.model, junction.related_class(name))
    ]
    if rel.back_populates in back:
        back = [rel.back_populates]
    if len(back) != 1:
        raise ManyToManyError(has_many_rel, "cannot identify the relationship back to the origin table")
    self_rel = back[0]

    pairs = junction.relationship(self_rel).local_remote_pairs
    if len(pairs) != 1:
        raise ManyToManyError(has_many_rel, "composite keys are not supported")
    local, remote = pairs[0]
    self_col = junction.mapper.get_property_by_column(local).key
    origin_col = source.mapper.get_property_by_column(remote).key

    foreign_rel = next(name for name in rel_names if name != self_rel)
    foreign_col = next(col for col in columns if col != self_col)

    return ManyToManyDescriptor(
        self_rel=self_rel,
        self_col=self_col,
        foreign_rel=foreign_rel,
        foreign_col=foreign_col,
        origin_col=origin_col,
        junction=junction.model,
    )
