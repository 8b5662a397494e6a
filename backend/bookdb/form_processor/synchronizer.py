# bookdb/form_processor/synchronizer.py
"""
Writes a validated form back to the database.

Column fields (plain columns and to-one relationships stored through their
foreign key) are written first; the row is flushed so it has a primary key;
then the mapping table rows of every to-many field are reconciled against the
submitted selection. Nothing here commits: the caller owns the transaction.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from bookdb.form_processor.relationships import RelationKind
from bookdb.form_processor.source import MappedSource

logger = logging.getLogger("uvicorn")

UPDATED = "updated"
CREATED = "created"


def _is_absent(value: Any) -> bool:
    return value is None or value == "" or value == []


def values_differ(old: Any, new: Any) -> bool:
    """False when both values are absent, or both present and equal."""
    if _is_absent(old) and _is_absent(new):
        return False
    if not _is_absent(old) and not _is_absent(new) and old == new:
        return False
    return True


def coerce_key(value: Any, py_type: Optional[type]) -> Any:
    """Convert a submitted key to the column's Python type; unconvertible values pass through."""
    if value is None or py_type is None or isinstance(value, py_type):
        return value
    try:
        return py_type(value)
    except (TypeError, ValueError):
        return value


class ModelSynchronizer:
    def __init__(self, db: Session, form):
        self.db = db
        self.form = form
        self.source = form.source
        self.disposition: Optional[str] = None
        self.changed_columns: List[str] = []
        self.created_links: Dict[str, list] = {}
        self.deleted_links: Dict[str, list] = {}

    def synchronize(self):
        """Create or update form.item from the form's values and return it."""
        fields = {f.name: f for f in self.form.fields if not f.noupdate}

        column_fields = {}
        to_many_fields = []
        for name, field in fields.items():
            column = self.source.storage_column(name)
            if column is not None:
                column_fields[column] = field
            elif field.relationship.kind is RelationKind.TO_MANY:
                to_many_fields.append(field)
            else:
                logger.debug(f"Field '{name}' has no storage column on {self.source.model.__name__}; skipped")

        item = self._save_columns(column_fields)

        for field in to_many_fields:
            self._save_to_many(item, field)

        if to_many_fields:
            self.db.flush()
            self.db.expire(item, [f.name for f in to_many_fields])

        self.form.item = item
        self.form.updated_or_created = self.disposition
        self.form.reset_params()
        return item

    # ---------- Columns ----------
    def _column_value(self, column: str, field) -> Any:
        if field.clear:
            return None
        if field.relationship.kind is RelationKind.TO_ONE:
            # options may be missing, so the key can still be the submitted string
            return coerce_key(field.value, self.source.column_python_type(column))
        return field.value

    def _save_columns(self, column_fields: dict):
        item = self.form.item

        if item is not None:
            for column in self.source.column_names():
                field = column_fields.get(column)
                if field is None:
                    continue
                value = self._column_value(column, field)
                if not values_differ(getattr(item, column), value):
                    continue
                setattr(item, column, value)
                self.changed_columns.append(column)
            self.db.add(item)
            self.db.flush()
            self.disposition = UPDATED
            logger.info(f"Updated {self.source.model.__name__} {self._identity(item)}: {self.changed_columns or 'no changes'}")
            return item

        data = {column: self._column_value(column, field) for column, field in column_fields.items()}
        item = self.source.model(**data)
        self.db.add(item)
        self.db.flush()
        self.changed_columns = list(data)
        self.disposition = CREATED
        self.form.item = item
        logger.info(f"Created {self.source.model.__name__} {self._identity(item)}")
        return item

    # ---------- To-many ----------
    def _save_to_many(self, item, field) -> None:
        m2m = field.many_to_many
        key_type = MappedSource(m2m.junction).column_python_type(m2m.foreign_col)
        value = field.value
        if value is None:
            wanted = []
        elif isinstance(value, (list, tuple, set)):
            wanted = list(value)
        else:
            wanted = [value]
        # dict keeps submission order for the rows we create
        keep = dict.fromkeys(coerce_key(v, key_type) for v in wanted)

        deleted = []
        if self.disposition == UPDATED:
            for row in list(getattr(item, field.name)):
                foreign_id = getattr(row, m2m.foreign_col)
                if foreign_id in keep:
                    del keep[foreign_id]
                else:
                    self.db.delete(row)
                    deleted.append(foreign_id)

        origin_id = getattr(item, m2m.origin_col)
        for foreign_id in keep:
            self.db.add(m2m.junction(**{m2m.self_col: origin_id, m2m.foreign_col: foreign_id}))

        self.deleted_links[field.name] = deleted
        self.created_links[field.name] = list(keep)
        if deleted or keep:
            logger.debug(f"{field.name}: removed {deleted}, added {list(keep)}")

    def _identity(self, item) -> str:
        return ",".join(str(getattr(item, pk)) for pk in self.source.primary_key())
