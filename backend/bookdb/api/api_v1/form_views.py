# bookdb/api/api_v1/form_views.py
"""Turn ModelForm state into API response models."""

from bookdb.form_processor import ModelForm
from bookdb.schemas.form import FieldInfo, FormResponse, FormSubmitResponse, OptionInfo


def _item_id(form: ModelForm):
    if form.item is None:
        return None
    (pk_name,) = form.source.primary_key()
    return getattr(form.item, pk_name)


def form_response(form: ModelForm) -> FormResponse:
    values = form.fif()
    return FormResponse(
        form=type(form).__name__,
        item_id=_item_id(form),
        fields=[
            FieldInfo(
                name=field.name,
                type=field.type_name,
                required=field.required,
                value=values.get(field.name),
                options=[OptionInfo(value=o.value, label=o.label, active=o.active) for o in field.options],
                errors=list(field.errors),
            )
            for field in form.sorted_fields()
        ],
        errors=list(form.form_errors),
    )


def submit_response(form: ModelForm, item) -> FormSubmitResponse:
    if item is None:
        return FormSubmitResponse(
            ok=False,
            item_id=_item_id(form),
            field_errors={f.name: list(f.errors) for f in form.error_fields()},
            form_errors=list(form.form_errors),
        )
    return FormSubmitResponse(
        ok=True,
        disposition=form.updated_or_created,
        item_id=_item_id(form),
    )
