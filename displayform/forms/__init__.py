"""Model field rendering - editable inputs and read-only views driven by field constraints."""

from displayform.forms.constraints import (
    Email,
    Exclude,
    Hidden,
    Max,
    MaxLength,
    Min,
    Password,
    Pattern,
    Range,
    Required,
    Url,
)
from displayform.forms.core import DisplayForModel, RenderRequest, display_for_model, errors_from_validation_error
from displayform.forms.decorators import display_model
from displayform.forms.model import DisplayModel, describe_fields, get_display_model, parse_ignore

__all__ = [
    "DisplayForModel",
    "DisplayModel",
    "Email",
    "Exclude",
    "Hidden",
    "Max",
    "MaxLength",
    "Min",
    "Password",
    "Pattern",
    "Range",
    "RenderRequest",
    "Required",
    "Url",
    "describe_fields",
    "display_for_model",
    "display_model",
    "errors_from_validation_error",
    "get_display_model",
    "parse_ignore",
]
