# bookdb/form_processor/fields.py
"""
Field types.

Every field type shares the same small interface:

    validate()                  type specific checks on self.input
    format_for_storage(value)   converts validated input into the value saved
    format_for_display(value)   converts a stored value into a form value

Profiles refer to field types by name ("Text", "Select", ...); the name is
resolved to a class once, when the form is built.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type

from bookdb.core.config import settings
from bookdb.form_processor.errors import UnknownFieldTypeError

INTEGER_RE = re.compile(r"^[-+]?\d+$")
TRUE_VALUES = {"1", "true", "on", "yes", "y", "t"}
FALSE_VALUES = {"0", "false", "off", "no", "n", "f", ""}


class Field:
    """A single form field bound to a column or relationship name."""

    type_name = "Field"
    multiple = False

    def __init__(
        self,
        name: str,
        required: bool = False,
        required_message: Optional[str] = None,
        clear: bool = False,
        noupdate: bool = False,
        order: int = 0,
        password: bool = False,
        trim: bool = True,
        size: Optional[int] = None,
        minlength: Optional[int] = None,
        range_start: Optional[int] = None,
        range_end: Optional[int] = None,
        label_column: Optional[str] = None,
        active_column: Optional[str] = None,
        sort_order: Optional[str] = None,
    ):
        self.name = name
        self.required = required
        self.required_message = required_message
        self.clear = clear
        self.noupdate = noupdate
        self.order = order
        self.password = password
        self.trim = trim
        self.size = size
        self.minlength = minlength
        self.range_start = range_start
        self.range_end = range_end
        self.label_column = label_column
        self.active_column = active_column
        self.sort_order = sort_order

        # set by the form at build time
        self.relationship = None
        self.many_to_many = None
        self.config = None

        self.input: Any = None
        self.value: Any = None
        self.init_value: Any = None
        self.errors: List[str] = []
        self.options: list = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, value={self.value!r})"

    # ---------- State ----------
    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_input(self) -> bool:
        return not _is_empty(self.input)

    def was_submitted(self) -> bool:
        """True if the params carried a non-empty value for this field."""
        return not _is_empty(self.input)

    def reset(self) -> None:
        """Forget submitted input and errors; value falls back to init_value."""
        self.input = None
        self.errors = []
        self.value = self.init_value

    def set_init_value(self, value: Any) -> None:
        self.init_value = self.format_for_display(value)
        self.value = self.init_value

    def set_options(self, options: list) -> None:
        self.options = list(options)

    # ---------- Validation ----------
    def validate_field(self) -> bool:
        """Run the common checks, then the type checks. Returns True if valid."""
        self.errors = []

        if self.clear:
            self.value = None
            return True

        if self.trim and isinstance(self.input, str):
            self.input = self.input.strip()

        if not self.has_input():
            if self.required:
                self.add_error(self.required_message or settings.FORM_REQUIRED_MESSAGE)
            self.value = None
            return not self.errors

        if not self.validate():
            return False

        self.value = self.format_for_storage(self.input)
        return True

    def validate(self) -> bool:
        if isinstance(self.input, (list, tuple)) and not self.multiple:
            self.add_error("This field does not take multiple values")
            return False
        return True

    # ---------- Conversion ----------
    def format_for_storage(self, value: Any) -> Any:
        return value

    def format_for_display(self, value: Any) -> Any:
        return value


class Text(Field):
    type_name = "Text"

    def validate(self) -> bool:
        if not super().validate():
            return False
        value = str(self.input)
        if self.size and len(value) > self.size:
            self.add_error(f"Please limit to {self.size} characters")
        if self.minlength and len(value) < self.minlength:
            self.add_error(f"Input must be at least {self.minlength} characters")
        return not self.errors

    def format_for_storage(self, value: Any) -> str:
        return str(value)


class Integer(Field):
    type_name = "Integer"

    def validate(self) -> bool:
        if not super().validate():
            return False
        if not INTEGER_RE.match(str(self.input)):
            self.add_error("Value must be an integer")
            return False
        number = int(self.input)
        low, high = self.range_start, self.range_end
        if low is not None and high is not None and not low <= number <= high:
            self.add_error(f"Value must be between {low} and {high}")
        elif low is not None and number < low:
            self.add_error(f"Value must be greater than or equal to {low}")
        elif high is not None and number > high:
            self.add_error(f"Value must be less than or equal to {high}")
        return not self.errors

    def format_for_storage(self, value: Any) -> int:
        return int(value)


class PosInteger(Integer):
    type_name = "PosInteger"

    def validate(self) -> bool:
        if not super().validate():
            return False
        if int(self.input) < 0:
            self.add_error("Value must be a positive integer")
        return not self.errors


class Boolean(Field):
    type_name = "Boolean"

    def has_input(self) -> bool:
        # an unchecked box submits nothing, which means false
        return True

    def validate(self) -> bool:
        if not super().validate():
            return False
        if self.input is not None and str(self.input).strip().lower() not in TRUE_VALUES | FALSE_VALUES:
            self.add_error("Value must be true or false")
        return not self.errors

    def format_for_storage(self, value: Any) -> bool:
        return str(value).strip().lower() in TRUE_VALUES

    def format_for_display(self, value: Any) -> Optional[bool]:
        return None if value is None else bool(value)


class DateTime(Field):
    type_name = "DateTime"
    parse = staticmethod(datetime.fromisoformat)

    def validate(self) -> bool:
        if not super().validate():
            return False
        if isinstance(self.input, date):
            return True
        try:
            self.parse(str(self.input))
        except ValueError:
            self.add_error("Please enter a valid date (YYYY-MM-DD or YYYY-MM-DDTHH:MM)")
        return not self.errors

    def format_for_storage(self, value: Any):
        return value if isinstance(value, date) else self.parse(str(value))

    def format_for_display(self, value: Any) -> Optional[str]:
        return value.isoformat() if isinstance(value, date) else value


class Date(DateTime):
    type_name = "Date"
    parse = staticmethod(date.fromisoformat)

    def format_for_storage(self, value: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        return value if isinstance(value, date) else self.parse(str(value))


class Select(Field):
    """Single choice from self.options (list of Option)."""
    type_name = "Select"

    def _match(self, submitted: Any):
        for option in self.options:
            if str(option.value) == str(submitted):
                return option
        return None

    def _check_choice(self, submitted: Any) -> bool:
        if self.options and self._match(submitted) is None:
            self.add_error(f"'{submitted}' is not a valid value")
            return False
        return True

    def validate(self) -> bool:
        if not super().validate():
            return False
        return self._check_choice(self.input)

    def format_for_storage(self, value: Any) -> Any:
        option = self._match(value)
        return option.value if option is not None else value


class Multiple(Select):
    """Several choices from self.options; value is always a list."""
    type_name = "Multiple"
    multiple = True

    def _as_list(self, value: Any) -> list:
        if value is None:
            return []
        if isinstance(value, (list, tuple, set)):
            return [v for v in value if not _is_empty(v)]
        return [value]

    def validate(self) -> bool:
        valid = True
        for submitted in self._as_list(self.input):
            valid = self._check_choice(submitted) and valid
        return valid

    def format_for_storage(self, value: Any) -> list:
        return [Select.format_for_storage(self, v) for v in self._as_list(value)]

    def format_for_display(self, value: Any) -> list:
        return self._as_list(value)

    def set_options(self, options: list) -> None:
        # currently selected values are listed first
        selected = {str(v) for v in self._as_list(self.init_value)}
        chosen = [o for o in options if str(o.value) in selected]
        rest = [o for o in options if str(o.value) not in selected]
        self.options = chosen + rest


FIELD_TYPES: Dict[str, Type[Field]] = {
    cls.type_name: cls
    for cls in (Text, Integer, PosInteger, Boolean, DateTime, Date, Select, Multiple)
}


def field_class(type_spec) -> Type[Field]:
    """Resolve a profile type name (or a Field subclass) to a field class."""
    if isinstance(type_spec, type) and issubclass(type_spec, Field):
        return type_spec
    try:
        return FIELD_TYPES[type_spec]
    except (KeyError, TypeError):
        raise UnknownFieldTypeError(str(type_spec)) from None


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == ()
