# bookdb/crud/forms.py
import logging
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookdb.form_processor import ModelForm

logger = logging.getLogger("uvicorn")


def submit_form(db: Session, form: ModelForm, params: Mapping[str, Any]) -> Optional[Any]:
    """
    Validate and save a form in one transaction.
    Returns the saved item, or None when validation failed (nothing is written).
    """
    try:
        item = form.update_from_form(params)
        if item is None:
            db.rollback()
            return None
        db.commit()
        db.refresh(item)
        return item
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Saving {type(form).__name__} failed: {e}")
        raise
