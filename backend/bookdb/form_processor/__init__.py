# bookdb/form_processor/__init__.py
from .errors import FormProcessorError, FormConfigurationError, ManyToManyError, UnknownFieldTypeError
from .fields import Field, Text, Integer, PosInteger, Boolean, DateTime, Date, Select, Multiple, FIELD_TYPES
from .form import ModelForm
from .options import Option, lookup_options
from .relationships import RelationKind, RelationshipDescriptor, ManyToManyDescriptor, classify, guess_field_type, many_to_many
from .source import MappedSource
from .synchronizer import ModelSynchronizer, CREATED, UPDATED
from .unique import validate_unique

__all__ = [
    "FormProcessorError",
    "FormConfigurationError",
    "ManyToManyError",
    "UnknownFieldTypeError",
    "Field",
    "Text",
    "Integer",
    "PosInteger",
    "Boolean",
    "DateTime",
    "Date",
    "Select",
    "Multiple",
    "FIELD_TYPES",
    "ModelForm",
    "Option",
    "lookup_options",
    "RelationKind",
    "RelationshipDescriptor",
    "ManyToManyDescriptor",
    "classify",
    "guess_field_type",
    "many_to_many",
    "MappedSource",
    "ModelSynchronizer",
    "CREATED",
    "UPDATED",
    "validate_unique",
]
