"""Exceptions raised while rendering model fields."""


class DisplayFormError(Exception):
    """Base class for displayform errors."""


class MissingModelError(DisplayFormError, ValueError):
    """Raised when a render call is made without a model instance."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "You must specify a model. E.g: {{ display_for_model(model=your_instance) }}"
        )


class MessageCatalogError(DisplayFormError):
    """Raised when a message catalog file cannot be loaded."""
