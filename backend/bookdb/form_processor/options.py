# bookdb/form_processor/options.py
"""
Select list options for fields bound to relationships.

Labels come from the field's label column. If the related table has an
active column, only active rows are listed, plus any rows the bound item
currently references, so an existing selection never silently disappears.
Inactive rows get a bracketed label: "[ Label ]".
"""

import logging
from typing import Any, List, NamedTuple

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from bookdb.form_processor.relationships import RelationKind
from bookdb.form_processor.source import MappedSource

logger = logging.getLogger("uvicorn")


class Option(NamedTuple):
    value: Any
    label: str
    active: bool = True


def inactive_label(label: Any) -> str:
    return f"[ {label} ]"


def lookup_options(db: Session, form, field) -> List[Option]:
    """Return the ordered options for a Select/Multiple field."""
    desc = field.relationship
    if desc is None or desc.kind not in (RelationKind.TO_ONE, RelationKind.TO_MANY):
        return []

    source = form.source
    if desc.kind is RelationKind.TO_MANY:
        # has_many to a mapping table: list rows of the table on the far side
        m2m = field.many_to_many
        related = MappedSource(m2m.junction).related_source(m2m.foreign_rel)
    else:
        related = source.related_source(field.name)

    config = field.config
    label_col = config.label_column
    if not related.has_column(label_col):
        logger.debug(f"No label column '{label_col}' on {related.model.__name__}; no options for '{field.name}'")
        return []

    active_col = config.active_column
    if active_col and not related.has_column(active_col):
        active_col = None

    sort_col = config.sort_column
    if not sort_col or not related.has_column(sort_col):
        sort_col = label_col

    model = related.model
    (pk_name,) = related.primary_key()
    stmt = select(model)

    if active_col:
        criteria = [getattr(model, active_col).is_(True)]
        current = _current_values(form, field)
        if current:
            criteria.append(getattr(model, pk_name).in_(current))
        stmt = stmt.where(or_(*criteria))

    stmt = stmt.order_by(getattr(model, sort_col))

    options = []
    for row in db.scalars(stmt).all():
        label = getattr(row, label_col)
        active = not active_col or bool(getattr(row, active_col))
        options.append(Option(
            value=getattr(row, pk_name),
            label=str(label) if active else inactive_label(label),
            active=active,
        ))
    return options


def _current_values(form, field) -> list:
    """Keys the bound item currently references through this field."""
    if form.item is None or field.init_value is None:
        return []
    value = field.init_value
    values = value if isinstance(value, (list, tuple, set)) else [value]
    return [v for v in values if v is not None]
