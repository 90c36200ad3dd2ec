"""Model naming, registration and field enumeration."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, ClassVar, Iterable

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from displayform.forms.constraints import (
    Constraint,
    Email,
    Exclude,
    Hidden,
    Password,
    Url,
    collect_constraints,
    has_marker,
    type_name,
    unwrap_annotation,
)
from displayform.lib.exceptions import MissingModelError

_model_registry: dict[str, type[BaseModel]] = {}

_WHITESPACE = re.compile(r"\s+")


def derive_model_name(cls: type) -> str:
    """Model name used as the qualified-name prefix. UserAccount -> useraccount"""
    return cls.__name__.lower()


def get_model_name(model_or_cls: Any) -> str:
    cls = model_or_cls if isinstance(model_or_cls, type) else type(model_or_cls)
    return getattr(cls, "_model_name", None) or derive_model_name(cls)


def get_display_model(name: str) -> type[BaseModel]:
    """Look up a registered model by name. Raises LookupError if not found."""
    try:
        return _model_registry[name]
    except KeyError:
        available = ", ".join(sorted(_model_registry)) or "(none)"
        raise LookupError(f"No model named '{name}'. Registered: {available}")


class DisplayModel(BaseModel):
    """Base class for models rendered with display_for_model.

    Usage:
        class User(DisplayModel):
            name: str
            email: EmailStr

        class Account(DisplayModel, model_name="acct"):
            ...

    If model_name is omitted, it's the lower-cased class name (User -> "user").
    """

    _model_name: ClassVar[str]

    def __init_subclass__(cls, model_name: str | None = None, **kwargs):
        super().__init_subclass__(**kwargs)

        if model_name is None:
            model_name = derive_model_name(cls)

        cls._model_name = model_name
        _model_registry[model_name] = cls


def parse_ignore(ignore: str | Iterable[str] | None) -> list[str] | None:
    """Parse the ignore option. "field1, field2" -> ["field1", "field2"]"""
    if ignore is None:
        return None
    if isinstance(ignore, str):
        return _WHITESPACE.sub("", ignore).split(",")
    return list(ignore)


# -- Field descriptors --


@dataclass(frozen=True)
class FieldSchema:
    """Static rendering metadata for one declared field of a model class."""

    name: str
    type_name: str
    constraints: tuple[Constraint, ...]
    hidden: bool = False
    excluded: bool = False
    is_date: bool = False
    label: str | None = None

    @property
    def kind(self) -> str:
        """Semantic type: url, email, password, date or text."""
        for constraint_cls, kind in ((Url, "url"), (Email, "email"), (Password, "password")):
            if any(isinstance(c, constraint_cls) for c in self.constraints):
                return kind
        if self.is_date:
            return "date"
        return "text"

    @property
    def default_label(self) -> str:
        return self.label or self.name.replace("_", " ").title()


@dataclass(frozen=True)
class FieldDescriptor:
    """A field schema bound to a live value and a qualified name."""

    schema: FieldSchema
    model_name: str
    value: Any

    @property
    def name(self) -> str:
        return self.schema.name

    @property
    def qualified_name(self) -> str:
        return f"{self.model_name}.{self.schema.name}"

    @property
    def id(self) -> str:
        return self.qualified_name.replace(".", "")

    @property
    def hidden(self) -> bool:
        return self.schema.hidden


def _is_date(annotation: Any) -> bool:
    """date and datetime subclasses, or a declared type named like PastDate."""
    declared = unwrap_annotation(annotation)
    if isinstance(declared, type) and issubclass(declared, datetime.date):
        return True
    return "Date" in type_name(annotation)


def _field_schema(name: str, info: FieldInfo) -> FieldSchema:
    extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
    return FieldSchema(
        name=name,
        type_name=type_name(info.annotation),
        constraints=collect_constraints(info),
        hidden=has_marker(info, Hidden, "hidden"),
        excluded=has_marker(info, Exclude, "exclude"),
        is_date=_is_date(info.annotation),
        label=extra.get("label") or info.title,
    )


@lru_cache(maxsize=256)
def model_schema(cls: type[BaseModel]) -> tuple[FieldSchema, ...]:
    """Field schemas for a model class, in declaration order. Cached for the most recently used classes."""
    return tuple(_field_schema(name, info) for name, info in cls.model_fields.items())


def is_ignored(schema: FieldSchema, ignore: list[str] | None) -> bool:
    """Explicit ignore names replace the per-field exclude marker rather than adding to it."""
    if ignore is None:
        return schema.excluded
    return schema.name in ignore


def describe_fields(model: BaseModel | None, ignore: list[str] | None = None) -> list[FieldDescriptor]:
    """Descriptors for the visible fields of model, in declaration order.

    Built fresh from the live instance on every call; attribute lookup
    errors propagate.
    """
    if model is None:
        raise MissingModelError()

    model_name = get_model_name(model)
    return [
        FieldDescriptor(schema=schema, model_name=model_name, value=getattr(model, schema.name))
        for schema in model_schema(type(model))
        if not is_ignored(schema, ignore)
    ]
