"""Input attributes derived from field constraints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from markupsafe import escape

from displayform.forms.constraints import Max, MaxLength, Min, Pattern, Range, Required

if TYPE_CHECKING:
    from displayform.config import Settings
    from displayform.forms.model import FieldDescriptor

Attribute = tuple[str, Any]


def type_attributes(descriptor: FieldDescriptor, label: str, settings: Settings) -> list[Attribute]:
    """The input type and its placeholder. First matching format wins."""
    kind = descriptor.schema.kind
    if kind == "url":
        return [("type", "url"), ("placeholder", settings.url_placeholder)]
    if kind == "email":
        return [("type", "email"), ("placeholder", settings.email_placeholder)]
    if kind == "password":
        return [("type", "password"), ("placeholder", settings.password_placeholder)]
    if kind == "date":
        return [("type", "date")]
    return [("type", "text"), ("placeholder", label)]


def constraint_attributes(descriptor: FieldDescriptor) -> list[Attribute]:
    """Validation attributes, always in the order required, min, max, range, maxlength, pattern."""
    constraints = descriptor.schema.constraints

    def of(kind):
        return [c for c in constraints if isinstance(c, kind)]

    attrs: list[Attribute] = []
    if of(Required):
        attrs.append(("required", "required"))
    attrs.extend(("min", c.value) for c in of(Min))
    attrs.extend(("max", c.value) for c in of(Max))
    for c in of(Range):
        attrs.append(("min", c.min))
        attrs.append(("max", c.max))
    attrs.extend(("maxlength", c.length) for c in of(MaxLength))
    attrs.extend(("pattern", c.regex) for c in of(Pattern))
    return attrs


def input_attributes(descriptor: FieldDescriptor, label: str, settings: Settings) -> list[Attribute]:
    """All attributes for the editable input of a field, None values dropped."""
    attrs = type_attributes(descriptor, label, settings) + constraint_attributes(descriptor)
    return [(name, value) for name, value in attrs if value is not None]


def render_attrs(attrs: list[Attribute]) -> str:
    """Render attribute pairs as an HTML string. Returns '' or ' key="val" key2="val2"'."""
    if not attrs:
        return ""
    return "".join(f' {name}="{escape(str(value))}"' for name, value in attrs)
