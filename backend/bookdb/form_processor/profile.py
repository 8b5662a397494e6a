# bookdb/form_processor/profile.py
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# A field definition is either a type name ("Text") or a dict of attributes
FieldSpec = Union[str, type, Dict[str, Any]]
FieldGroup = Union[List[str], Dict[str, FieldSpec]]


class FormProfile(BaseModel):
    """Declarative description of a form.

    required / optional / fields   name -> type name or attribute dict
    auto_required / auto_optional  names whose types are guessed from the schema
    unique                         names that must be unique in the table, or
                                   name -> error message
    dependency                     groups of names: if one has input, all are required
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    required: Optional[Dict[str, FieldSpec]] = None
    optional: Optional[Dict[str, FieldSpec]] = None
    fields: Optional[Dict[str, FieldSpec]] = None
    auto_required: List[str] = Field(default_factory=list)
    auto_optional: List[str] = Field(default_factory=list)
    auto_fields: List[str] = Field(default_factory=list)
    unique: Optional[Union[List[str], Dict[str, Optional[str]]]] = None
    dependency: List[List[str]] = Field(default_factory=list)

    def groups(self):
        """Yield (definitions, auto_names, required) in build order."""
        yield self.required, self.auto_required, True
        yield self.optional, self.auto_optional, False
        yield self.fields, self.auto_fields, False

    def unique_messages(self, default: str) -> Dict[str, str]:
        """Map each unique field name to the message shown on collision."""
        if not self.unique:
            return {}
        if isinstance(self.unique, dict):
            return {name: message or default for name, message in self.unique.items()}
        return {name: default for name in self.unique}


class FieldConfig(BaseModel):
    """Option lookup settings, resolved once when the field is built."""
    model_config = ConfigDict(frozen=True)

    label_column: str
    active_column: Optional[str] = None
    sort_column: Optional[str] = None


def resolve_field_config(
    form_active_column: Optional[str],
    field_label_column: Optional[str],
    field_active_column: Optional[str],
    field_sort_order: Optional[str],
    default_label_column: str,
    default_active_column: Optional[str] = None,
) -> FieldConfig:
    """Form settings win over field settings, which win over application defaults."""
    label_column = field_label_column or default_label_column
    return FieldConfig(
        label_column=label_column,
        active_column=form_active_column or field_active_column or default_active_column,
        sort_column=field_sort_order or label_column,
    )
