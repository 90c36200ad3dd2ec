"""Rendering of model fields as editable inputs or read-only views."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from markupsafe import Markup, escape
from pydantic import BaseModel, ValidationError

from displayform.config import Settings, get_settings
from displayform.forms.fields import input_attributes, render_attrs
from displayform.forms.model import FieldDescriptor, describe_fields, get_model_name, parse_ignore
from displayform.lib.exceptions import MissingModelError

logger = logging.getLogger(__name__)

Sink = Callable[[str], Any]


class Messages(Protocol):
    def get(self, key: str, default: str | None = None) -> str | None: ...


@dataclass(frozen=True)
class RenderRequest:
    model: BaseModel
    ignore: tuple[str, ...] | None = None
    editable: bool = True

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> RenderRequest:
        """Build a request from host tag options: model, ignore, editable."""
        model = args.get("model")
        if model is None:
            raise MissingModelError()

        ignore = parse_ignore(args.get("ignore"))
        # Anything but True, including "false" or 0, means view mode
        editable = args.get("editable")
        return cls(
            model=model,
            ignore=tuple(ignore) if ignore is not None else None,
            editable=editable is None or editable is True,
        )


def errors_from_validation_error(model: Any, exc: ValidationError) -> dict[str, str]:
    """Key pydantic validation errors by qualified field name, first error per field."""
    model_name = get_model_name(model)
    errors: dict[str, str] = {}
    for err in exc.errors():
        if not err["loc"]:
            continue
        key = f"{model_name}.{err['loc'][0]}"
        if key not in errors:
            errors[key] = err["msg"]
    return errors


class DisplayForModel:
    """Writes HTML markup for each visible field of a model.

    Usage:
        renderer = DisplayForModel(messages=catalog, errors={"user.age": "Too young"})
        html = renderer.render(RenderRequest(model=user, editable=False))

        # or stream to any writer
        renderer.render_to(RenderRequest(model=user), response_body.write)

    messages maps qualified field names to labels and errors maps them to
    pending validation messages. Both default to empty.
    """

    def __init__(
        self,
        messages: Messages | None = None,
        errors: Mapping[str, str] | None = None,
        settings: Settings | None = None,
    ):
        self.messages = messages if messages is not None else {}
        self.errors = errors if errors is not None else {}
        self.settings = settings or get_settings()

    def render(self, request: RenderRequest) -> Markup:
        parts: list[str] = []
        self.render_to(request, parts.append)
        return Markup("".join(parts))

    def render_to(self, request: RenderRequest, write: Sink) -> None:
        fields = describe_fields(request.model, list(request.ignore) if request.ignore is not None else None)
        logger.debug(
            "Rendering %d field(s) of %s (%s)",
            len(fields),
            get_model_name(request.model),
            "editable" if request.editable else "view",
        )

        for descriptor in fields:
            if descriptor.hidden:
                write(self.render_hidden(descriptor))
            elif request.editable:
                write(self.render_editable(descriptor))
            else:
                write(self.render_view(descriptor))

    # -- Field rendering --

    def label(self, descriptor: FieldDescriptor) -> str:
        label = self.messages.get(descriptor.qualified_name, descriptor.schema.default_label)
        return label if label is not None else descriptor.schema.default_label

    def error(self, descriptor: FieldDescriptor) -> str | None:
        return self.errors.get(descriptor.qualified_name) or None

    def render_hidden(self, descriptor: FieldDescriptor) -> str:
        value = "" if descriptor.value is None else descriptor.value
        return (
            f'<input type="hidden" name="{escape(descriptor.qualified_name)}" '
            f'value="{escape(str(value))}"/>'
        )

    def render_view(self, descriptor: FieldDescriptor) -> str:
        value = descriptor.value
        text = str(value) if value is not None else ""
        if not text:
            text = self.settings.empty_value

        html = self._label_tag(descriptor)
        html += (
            f'\t<span id="{escape(descriptor.id)}" name="{escape(descriptor.qualified_name)}">'
            f"{escape(text)}</span>"
        )
        html += self._error_tag(descriptor)
        return html + "\n</p>\n"

    def render_editable(self, descriptor: FieldDescriptor) -> str:
        label = self.label(descriptor)
        attrs = []
        if descriptor.value is not None:
            attrs.append(("value", descriptor.value))
        attrs.extend(input_attributes(descriptor, label, self.settings))

        html = self._label_tag(descriptor, label)
        html += (
            f'\t<input id="{escape(descriptor.id)}" name="{escape(descriptor.qualified_name)}"'
            f"{render_attrs(attrs)}/>"
        )
        html += self._error_tag(descriptor)
        return html + "\n</p>\n"

    def _label_tag(self, descriptor: FieldDescriptor, label: str | None = None) -> str:
        label = label if label is not None else self.label(descriptor)
        return f'\n<p>\n\t<label for="{escape(descriptor.id)}">{escape(label)}</label>\n'

    def _error_tag(self, descriptor: FieldDescriptor) -> str:
        message = self.error(descriptor)
        if not message:
            return ""
        return f'<span class="error">{escape(message)}</span>'


def display_for_model(
    args: Mapping[str, Any],
    messages: Messages | None = None,
    errors: Mapping[str, str] | None = None,
    settings: Settings | None = None,
) -> Markup:
    """Render a model from host tag options.

    Usage:
        display_for_model({"model": user})
        display_for_model({"model": user, "ignore": "field1, field2"})
        display_for_model({"model": user, "editable": False})
    """
    request = RenderRequest.from_args(args)
    return DisplayForModel(messages=messages, errors=errors, settings=settings).render(request)
