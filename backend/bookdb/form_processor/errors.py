# bookdb/form_processor/errors.py
"""
Errors raised by the form processor.

Validation failures are never raised: they are collected on the fields and
the form. Only configuration problems raise, plus whatever the database layer
raises during synchronization (those propagate unchanged).
"""


class FormProcessorError(Exception):
    """Base class for form processor errors."""


class FormConfigurationError(FormProcessorError):
    """The form definition does not fit the bound model."""


class UnknownFieldTypeError(FormConfigurationError):
    """A profile names a field type that is not registered."""

    def __init__(self, type_name: str):
        super().__init__(f"Unknown field type '{type_name}'")
        self.type_name = type_name


class ManyToManyError(FormConfigurationError):
    """A to-many relationship is not backed by a two-column mapping table."""

    def __init__(self, relationship_name: str, reason: str):
        super().__init__(f"Relationship '{relationship_name}' is not a supported many-to-many: {reason}")
        self.relationship_name = relationship_name
