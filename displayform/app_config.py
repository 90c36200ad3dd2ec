"""Template engine integration for Jinja2 and Litestar."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.template import TemplateConfig
from markupsafe import Markup

from displayform.config import Settings
from displayform.forms.core import DisplayForModel, Messages, RenderRequest

ERRORS_CONTEXT_KEY = "errors"
MESSAGES_CONTEXT_KEY = "messages"


def make_display_for_model(messages: Messages | None = None, settings: Settings | None = None):
    """Build the display_for_model template global.

    Pending errors come from the template's `errors` variable; labels from
    the `messages` variable when the template defines one, else from the
    catalog bound here.

        {{ display_for_model(model=user) }}
        {{ display_for_model(model=user, ignore="password, token", editable=false) }}
    """

    @jinja2.pass_context
    def display_for_model(context: jinja2.runtime.Context, **args: Any) -> Markup:
        # Undefined template variables count as absent options
        args = {k: v for k, v in args.items() if not isinstance(v, jinja2.Undefined)}
        request = RenderRequest.from_args(args)
        renderer = DisplayForModel(
            messages=context.get(MESSAGES_CONTEXT_KEY) or messages,
            errors=context.get(ERRORS_CONTEXT_KEY) or {},
            settings=settings,
        )
        return renderer.render(request)

    return display_for_model


def configure_template_engine(
    environment: jinja2.Environment,
    messages: Messages | None = None,
    settings: Settings | None = None,
) -> jinja2.Environment:
    """Install the display_for_model global on a Jinja environment."""
    environment.globals["display_for_model"] = make_display_for_model(messages, settings)
    return environment


def build_template_config(
    directories: list[Path],
    messages: Messages | None = None,
    settings: Settings | None = None,
) -> TemplateConfig:
    """Build a Litestar Jinja template configuration with display_for_model available."""

    def engine_callback(engine):
        configure_template_engine(engine.engine, messages, settings)

    return TemplateConfig(
        directory=directories,
        engine=JinjaTemplateEngine,
        engine_callback=engine_callback,
    )
