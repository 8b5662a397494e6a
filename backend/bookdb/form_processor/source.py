# bookdb/form_processor/source.py
"""
Narrow view of a mapped class used by the form processor.

Everything the processor needs to know about the database schema goes
through SchemaSource; MappedSource implements it on top of
sqlalchemy.inspect().
"""

from datetime import date
from typing import List, Optional, Protocol, Type

from sqlalchemy import inspect
from sqlalchemy.orm import Mapper, RelationshipDirection

SINGLE = "single"
MULTI = "multi"


class SchemaSource(Protocol):
    model: type

    def has_column(self, name: str) -> bool: ...

    def has_relationship(self, name: str) -> bool: ...

    def column_names(self) -> List[str]: ...

    def relationship_names(self) -> List[str]: ...

    def accessor(self, name: str) -> Optional[str]: ...

    def related_class(self, name: str) -> Optional[type]: ...

    def related_source(self, name: str) -> "SchemaSource": ...

    def primary_key(self) -> List[str]: ...

    def column_python_type(self, name: str) -> Optional[type]: ...

    def storage_column(self, name: str) -> Optional[str]: ...


class MappedSource:
    """SchemaSource over a SQLAlchemy declarative class."""

    def __init__(self, model: Type):
        self.model = model
        self.mapper: Mapper = inspect(model)

    def __repr__(self) -> str:
        return f"MappedSource({self.model.__name__})"

    # ---------- Columns ----------
    def has_column(self, name: str) -> bool:
        return name in self.mapper.column_attrs

    def column_names(self) -> List[str]:
        return [attr.key for attr in self.mapper.column_attrs]

    def column_python_type(self, name: str) -> Optional[type]:
        if not self.has_column(name):
            return None
        column = self.mapper.column_attrs[name].columns[0]
        try:
            return column.type.python_type
        except NotImplementedError:
            return None

    def is_temporal_column(self, name: str) -> bool:
        py_type = self.column_python_type(name)
        return py_type is not None and issubclass(py_type, date)

    def primary_key(self) -> List[str]:
        return [self.mapper.get_property_by_column(col).key for col in self.mapper.primary_key]

    # ---------- Relationships ----------
    def has_relationship(self, name: str) -> bool:
        return name in self.mapper.relationships

    def relationship_names(self) -> List[str]:
        return [rel.key for rel in self.mapper.relationships]

    def relationship(self, name: str):
        return self.mapper.relationships[name]

    def accessor(self, name: str) -> Optional[str]:
        """'single' for scalar relationships, 'multi' for collections."""
        if not self.has_relationship(name):
            return None
        return MULTI if self.relationship(name).uselist else SINGLE

    def related_class(self, name: str) -> Optional[type]:
        if not self.has_relationship(name):
            return None
        return self.relationship(name).mapper.class_

    def related_source(self, name: str) -> "MappedSource":
        return MappedSource(self.related_class(name))

    def storage_column(self, name: str) -> Optional[str]:
        """Column attribute that stores a field's value on this model.

        Plain columns store themselves. A many-to-one relationship stores
        through its single local foreign key column.
        """
        if self.has_column(name):
            return name
        if not self.has_relationship(name):
            return None
        rel = self.relationship(name)
        if rel.direction is not RelationshipDirection.MANYTOONE or len(rel.local_columns) != 1:
            return None
        (column,) = rel.local_columns
        return self.mapper.get_property_by_column(column).key
