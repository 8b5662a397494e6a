# bookdb/schemas/form.py
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

# submitted value: a scalar or the list of a multiple select
FormValue = Union[str, int, float, bool, None, List[Union[str, int]]]


class OptionInfo(BaseModel):
    value: Any
    label: str
    active: bool = True


class FieldInfo(BaseModel):
    name: str
    type: str
    required: bool = False
    value: Any = None
    options: List[OptionInfo] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class FormResponse(BaseModel):
    form: str
    item_id: Optional[int] = None
    fields: List[FieldInfo]
    errors: List[str] = Field(default_factory=list)


class FormSubmitResponse(BaseModel):
    ok: bool
    disposition: Optional[str] = None   # "created" or "updated"
    item_id: Optional[int] = None
    field_errors: Dict[str, List[str]] = Field(default_factory=dict)
    form_errors: List[str] = Field(default_factory=list)
