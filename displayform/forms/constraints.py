"""Field constraints and rendering markers attached through ``Annotated`` metadata.

Usage:
    class Account(DisplayModel):
        id: Annotated[int, Hidden()]
        age: Annotated[int, Required(), Range(18, 130)]
        homepage: Annotated[str, Url()] = ""
        internal_notes: Annotated[str, Exclude()] = ""

Native pydantic constraints are picked up as well: ``Field(ge=1)`` reads as
``Min(1)``, ``Field(le=9)`` as ``Max(9)``, ``Field(max_length=20)`` as
``MaxLength(20)`` and ``Field(pattern=...)`` as ``Pattern(...)``.
"""

from __future__ import annotations

import types
import typing
from dataclasses import dataclass
from typing import Any, Union

import annotated_types
from pydantic.fields import FieldInfo


@dataclass(frozen=True)
class Required:
    pass


@dataclass(frozen=True)
class Min:
    value: Any


@dataclass(frozen=True)
class Max:
    value: Any


@dataclass(frozen=True)
class Range:
    min: Any
    max: Any


@dataclass(frozen=True)
class MaxLength:
    length: int


@dataclass(frozen=True)
class Pattern:
    regex: str


@dataclass(frozen=True)
class Email:
    pass


@dataclass(frozen=True)
class Url:
    pass


@dataclass(frozen=True)
class Password:
    pass


@dataclass(frozen=True)
class Hidden:
    """Always render as a hidden input, in both editable and view mode."""


@dataclass(frozen=True)
class Exclude:
    """Omit from rendering unless an explicit ignore list is given."""


Constraint = Union[Required, Min, Max, Range, MaxLength, Pattern, Email, Url, Password]

CONSTRAINT_TYPES = (Required, Min, Max, Range, MaxLength, Pattern, Email, Url, Password)

# Annotation names that imply a format constraint
_FORMAT_BY_TYPE_NAME = {
    "EmailStr": Email,
    "NameEmail": Email,
    "SecretStr": Password,
    "AnyUrl": Url,
    "AnyHttpUrl": Url,
    "HttpUrl": Url,
    "Url": Url,
}


def unwrap_annotation(annotation: Any) -> Any:
    """Strip Optional[...] / X | None down to the declared type."""
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return unwrap_annotation(args[0])
    return annotation


def type_name(annotation: Any) -> str:
    annotation = unwrap_annotation(annotation)
    if annotation is None:
        return ""
    return getattr(annotation, "__name__", None) or str(annotation)


def _from_native(item: Any) -> list[Constraint]:
    """Translate pydantic / annotated_types metadata into constraints."""
    if isinstance(item, annotated_types.Ge):
        return [Min(item.ge)]
    if isinstance(item, annotated_types.Le):
        return [Max(item.le)]
    if isinstance(item, annotated_types.MaxLen):
        return [MaxLength(item.max_length)]
    pattern = getattr(item, "pattern", None)
    if isinstance(pattern, str):
        return [Pattern(pattern)]
    return []


def collect_constraints(field_info: FieldInfo) -> tuple[Constraint, ...]:
    """Collect the constraints declared on a pydantic field, in declaration order."""
    found: list[Constraint] = []

    if field_info.is_required():
        found.append(Required())

    format_cls = _FORMAT_BY_TYPE_NAME.get(type_name(field_info.annotation))
    if format_cls is not None:
        found.append(format_cls())

    for item in field_info.metadata:
        if isinstance(item, CONSTRAINT_TYPES):
            found.append(item)
        else:
            found.extend(_from_native(item))

    # One Required is enough; the rest keep their order
    deduped: list[Constraint] = []
    for constraint in found:
        if isinstance(constraint, Required) and any(isinstance(c, Required) for c in deduped):
            continue
        deduped.append(constraint)
    return tuple(deduped)


def has_marker(field_info: FieldInfo, marker: type, extra_key: str) -> bool:
    """True if the field carries the marker in metadata or json_schema_extra."""
    if any(isinstance(item, marker) for item in field_info.metadata):
        return True
    extra = field_info.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(extra_key))
