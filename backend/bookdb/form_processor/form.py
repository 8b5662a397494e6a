# bookdb/form_processor/form.py
"""
Form base class bound to a SQLAlchemy model.

Subclass ModelForm, set ``model`` to a mapped class and ``profile`` to a dict
describing the fields. Field names must be column or relationship names of
the model:

    class BookForm(ModelForm):
        model = Book
        active_column = "is_active"
        profile = {
            "required": {"title": "Text", "author": "Select"},
            "optional": {"isbn": {"type": "Text", "size": 20}, "genres": "Multiple"},
            "unique": {"isbn": "Duplicate ISBN number"},
        }

    form = BookForm(db, item_id=book_id)
    book = form.update_from_form(params)   # None if validation failed
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from bookdb.core.config import settings
from bookdb.form_processor.errors import FormConfigurationError
from bookdb.form_processor.fields import Field, field_class
from bookdb.form_processor.options import lookup_options
from bookdb.form_processor.profile import FormProfile, resolve_field_config
from bookdb.form_processor.relationships import RelationKind, classify, guess_field_type, many_to_many
from bookdb.form_processor.source import MappedSource
from bookdb.form_processor.synchronizer import ModelSynchronizer
from bookdb.form_processor.unique import validate_unique
from settings import FormDefaults

logger = logging.getLogger("uvicorn")

ID_RE = re.compile(FormDefaults.ID_PATTERN)


class ModelForm:
    model: Optional[type] = None
    profile: Any = None

    # form-wide active column for select lists; wins over field settings
    active_column: Optional[str] = None
    # exclude the bound item from uniqueness checks
    unique_excludes_item: bool = False

    def __init__(self, db: Session, item=None, item_id: Any = None):
        if self.model is None:
            raise FormConfigurationError(f"{type(self).__name__} does not define a model")
        if not self.profile:
            raise FormConfigurationError(f"Please define 'profile' in {type(self).__name__}")

        self.db = db
        self.source = MappedSource(self.model)
        self.profile = FormProfile.model_validate(self.profile)

        self.item_id = item_id
        self.item = item if item is not None else self.init_item()

        self.fields: List[Field] = []
        self.params: Dict[str, Any] = {}
        self.form_errors: List[str] = []
        self.validated = False
        self.updated_or_created: Optional[str] = None
        self.sync_result: Optional[ModelSynchronizer] = None

        self.build_form()
        self.load_init_values()
        self.load_options()

    # ---------- Building ----------
    def build_form(self) -> None:
        for definitions, auto_names, required in self.profile.groups():
            for name, spec in (definitions or {}).items():
                self.add_field(self.make_field(name, spec, required))
            for name in auto_names:
                self.add_field(self.make_field(name, None, required))

    def make_field(self, name: str, spec: Any, required: bool) -> Field:
        """Build a field from a type name, a Field subclass, a dict of attributes, or None (guess)."""
        attrs: Dict[str, Any] = {}
        if isinstance(spec, dict):
            attrs = dict(spec)
            spec = attrs.pop("type", None)
        if spec is None:
            spec = self.guess_field_type(name)

        desc = classify(self.source, name)
        if desc.kind is RelationKind.UNKNOWN:
            logger.warning(f"⚠️ {type(self).__name__}: '{name}' is not a column or relationship of {self.model.__name__}")
            raise FormConfigurationError(
                f"Field '{name}' is not a column or relationship of {self.model.__name__}"
            )
        # mapping tables we cannot maintain fail here, at build time
        m2m = many_to_many(self.source, name) if desc.kind is RelationKind.TO_MANY else None

        attrs.setdefault("required", required)
        try:
            field = field_class(spec)(name, **attrs)
        except TypeError as e:
            raise FormConfigurationError(f"Bad attributes for field '{name}': {e}") from e

        field.relationship = desc
        field.many_to_many = m2m
        field.config = resolve_field_config(
            form_active_column=self.active_column,
            field_label_column=field.label_column,
            field_active_column=field.active_column,
            field_sort_order=field.sort_order,
            default_label_column=settings.FORM_LABEL_COLUMN,
            default_active_column=settings.FORM_ACTIVE_COLUMN,
        )
        return field

    def add_field(self, field: Field) -> None:
        existing = self.field(field.name)
        if existing is not None:
            self.fields.remove(existing)
        self.fields.append(field)

    def guess_field_type(self, name: str) -> str:
        return guess_field_type(self.source, name)

    def init_item(self):
        if self.item_id is None or not ID_RE.match(str(self.item_id)):
            return None
        return self.db.get(self.model, int(self.item_id))

    # ---------- Initial values and options ----------
    def load_init_values(self) -> None:
        for field in self.fields:
            hook = getattr(self, f"init_value_{field.name}", None)
            value = hook(field, self.item) if callable(hook) else self.init_value(field)
            field.set_init_value(value)

    def init_value(self, field: Field, item=None) -> Any:
        """Value of a field as stored on the item (foreign ids for to-many fields)."""
        item = item if item is not None else self.item
        if item is None:
            return None

        desc = field.relationship
        if desc.kind is RelationKind.TO_MANY:
            foreign_col = field.many_to_many.foreign_col
            return [getattr(row, foreign_col) for row in getattr(item, field.name)]
        if desc.storage_column:
            return getattr(item, desc.storage_column)
        if desc.kind is RelationKind.TO_ONE:
            related = getattr(item, field.name)
            if related is None:
                return None
            (pk_name,) = self.source.related_source(field.name).primary_key()
            return getattr(related, pk_name)
        field.add_error("Could not identify column or relationship.")
        return None

    def load_options(self) -> None:
        for field in self.fields:
            hook = getattr(self, f"options_{field.name}", None)
            if callable(hook):
                field.set_options(hook(field))
            elif field.relationship.kind in (RelationKind.TO_ONE, RelationKind.TO_MANY):
                field.set_options(lookup_options(self.db, self, field))

    # ---------- Accessors ----------
    def field(self, name: str) -> Optional[Field]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def sorted_fields(self) -> List[Field]:
        return sorted(self.fields, key=lambda f: f.order)

    def error_fields(self) -> List[Field]:
        return [f for f in self.fields if f.has_errors()]

    def error_field_names(self) -> List[str]:
        return [f.name for f in self.error_fields()]

    def errors(self) -> List[str]:
        """All error messages: form level first, then per field."""
        messages = list(self.form_errors)
        for field in self.fields:
            messages.extend(field.errors)
        return messages

    def has_errors(self) -> bool:
        return bool(self.form_errors) or bool(self.error_fields())

    def fif(self) -> Dict[str, Any]:
        """Fill-in-form values: submitted params if any, else current values."""
        values = {}
        for field in self.fields:
            if field.password:
                continue
            if field.name in self.params:
                values[field.name] = self.params[field.name]
            else:
                values[field.name] = field.value
        return values

    # ---------- Validation ----------
    def clear(self) -> None:
        """Forget params, errors and validation state."""
        self.params = {}
        self.form_errors = []
        self.validated = False
        for field in self.fields:
            field.reset()

    def reset_params(self) -> None:
        """Drop submitted params and reload values from the bound item."""
        self.params = {}
        self.validated = False
        for field in self.fields:
            field.input = None
        self.load_init_values()

    def validate(self, params: Optional[Mapping[str, Any]] = None) -> bool:
        self.clear()
        self.params = dict(params or {})

        for field in self.fields:
            field.input = self.params.get(field.name)
            field.validate_field()

        self.check_dependencies()

        for field in self.fields:
            if field.has_errors() or field.clear:
                continue
            hook = getattr(self, f"validate_{field.name}", None)
            if callable(hook):
                hook(field)

        self.cross_validate()

        if not self.error_fields():
            self.model_validate()

        if self.error_fields():
            self.form_errors.append(settings.FORM_ERROR_MESSAGE)
        self.validated = not self.has_errors()
        return self.validated

    def check_dependencies(self) -> None:
        """If any field of a dependency group has input, every field in it is required."""
        for group in self.profile.dependency:
            fields = [self.field(name) for name in group]
            fields = [f for f in fields if f is not None]
            if not any(f.was_submitted() for f in fields):
                continue
            for field in fields:
                if not field.was_submitted() and not field.has_errors():
                    field.add_error(field.required_message or settings.FORM_REQUIRED_MESSAGE)

    def cross_validate(self) -> None:
        """Hook for validation that involves several fields."""

    def model_validate(self) -> bool:
        """Validation that needs database lookups."""
        return validate_unique(self.db, self) == 0

    # ---------- Saving ----------
    def update_from_form(self, params: Mapping[str, Any]):
        """Validate params and create or update the item. Returns None if invalid."""
        if not self.validate(params):
            logger.debug(f"{type(self).__name__} failed validation: {self.error_field_names()}")
            return None
        return self.update_model()

    def update_model(self):
        if self.has_errors():
            raise FormConfigurationError("update_model called on a form with errors")
        self.sync_result = ModelSynchronizer(self.db, self)
        item = self.sync_result.synchronize()
        self.load_options()
        return item
