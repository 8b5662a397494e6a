# bookdb/form_processor/unique.py
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookdb.core.config import settings

logger = logging.getLogger("uvicorn")


def validate_unique(db: Session, form) -> int:
    """
    Check fields listed in the profile's "unique" entry against the table.

    Fields that already have errors or no value are skipped. Each collision
    attaches one error to the field. Returns the number of failing fields.

    The row being edited is only excluded from the count when the form sets
    ``unique_excludes_item``; by default an unchanged unique value on an
    update collides with itself.
    """
    messages = form.profile.unique_messages(settings.FORM_UNIQUE_MESSAGE)
    if not messages:
        return 0

    model = form.model
    exclude = form.item if form.unique_excludes_item else None

    found_error = 0
    for name, message in messages.items():
        field = form.field(name)
        if field is None or field.has_errors() or field.value is None:
            continue

        column = field.relationship.storage_column or name
        stmt = select(func.count()).select_from(model).where(getattr(model, column) == field.value)
        if exclude is not None:
            for pk_name in form.source.primary_key():
                stmt = stmt.where(getattr(model, pk_name) != getattr(exclude, pk_name))

        count = db.scalar(stmt) or 0
        if count < 1:
            continue

        logger.debug(f"Unique check failed for {model.__name__}.{column}={field.value!r} ({count} rows)")
        field.add_error(message)
        found_error += 1

    return found_error
