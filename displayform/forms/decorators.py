"""Decorator alternative to DisplayModel subclassing."""

from __future__ import annotations

from displayform.forms.model import _model_registry, derive_model_name


def display_model(name: str | None = None):
    """Register a plain BaseModel under a model name.

    Usage:
        @display_model("acct")
        class Account(BaseModel):
            owner: str
            balance: int

    If name is omitted, it's the lower-cased class name (same as DisplayModel).
    The name prefixes every qualified field name, e.g. "acct.owner".
    """

    def decorator(cls):
        model_name = name
        if model_name is None:
            model_name = derive_model_name(cls)

        cls._model_name = model_name

        _model_registry[model_name] = cls
        return cls

    return decorator
