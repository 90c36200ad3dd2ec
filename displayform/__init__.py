"""displayform - render pydantic models as HTML form fields."""

from displayform.forms import DisplayForModel, DisplayModel, RenderRequest, display_for_model, display_model
from displayform.lib.exceptions import DisplayFormError, MissingModelError

__all__ = [
    "DisplayForModel",
    "DisplayFormError",
    "DisplayModel",
    "MissingModelError",
    "RenderRequest",
    "display_for_model",
    "display_model",
]
