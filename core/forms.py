from django.core.exceptions import ValidationError


def apply_validation_error(form, exc: ValidationError):
    """
    Attach a service-layer ValidationError to a bound form.

    Field-keyed errors land on the matching field when the form has it,
    everything else becomes a non-field error.
    """
    if hasattr(exc, "error_dict"):
        for field, errors in exc.message_dict.items():
            form.add_error(field if field in form.fields else None, errors)
    else:
        form.add_error(None, exc.messages)
