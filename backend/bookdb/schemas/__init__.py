# bookdb/schemas/__init__.py
from .form import (
    FormValue,
    OptionInfo,
    FieldInfo,
    FormResponse,
    FormSubmitResponse,
)
