"""CLI commands for displayform."""

import importlib
import json
import logging
import sys

import click
from pydantic import ValidationError

from displayform.config import get_settings
from displayform.forms.core import DisplayForModel, RenderRequest, errors_from_validation_error
from displayform.forms.model import _model_registry, get_display_model, parse_ignore
from displayform.lib.exceptions import DisplayFormError
from displayform.lib.messages import MessageCatalog


def _import_module(module_name: str):
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise click.ClickException(f"Cannot import module '{module_name}': {e}")


def _resolve_model(target: str, modules: tuple[str, ...] = ()):
    """Resolve MODEL as 'package.module:ClassName' or as a registered model name.

    Registered names are looked up after importing each of modules, which
    registers the DisplayModel subclasses they define.
    """
    for module_name in modules:
        _import_module(module_name)

    if ":" not in target:
        try:
            return get_display_model(target)
        except LookupError as e:
            raise click.ClickException(str(e))

    module_name, _, class_name = target.partition(":")
    if not module_name or not class_name:
        raise click.BadParameter(f"Expected 'module:ClassName' or a model name, got '{target}'", param_hint="MODEL")

    module = _import_module(module_name)

    try:
        return getattr(module, class_name)
    except AttributeError:
        raise click.ClickException(f"Module '{module_name}' has no attribute '{class_name}'")


def _construct(model_cls, values: dict):
    """Build an unvalidated instance; required fields missing from values are None."""
    missing = {
        name: None
        for name, info in model_cls.model_fields.items()
        if info.is_required() and name not in values
    }
    return model_cls.model_construct(**missing, **values)


def _load_messages(path):
    if path is None:
        return MessageCatalog.from_settings()
    return MessageCatalog.load(path)


@click.group()
@click.version_option(package_name="displayform")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level",
)
def cli(log_level):
    """displayform - render pydantic models as HTML form fields."""
    logging.basicConfig(level=log_level.upper(), stream=sys.stderr)


@cli.command()
@click.argument("model")
@click.option(
    "-m",
    "--module",
    "modules",
    multiple=True,
    help="Module to import before resolving a registered model name",
)
@click.option("--data", default="{}", help="Field values as a JSON object")
@click.option("--ignore", default=None, help="Comma-separated field names to skip")
@click.option("--view", is_flag=True, help="Render read-only views instead of inputs")
@click.option("--validate", is_flag=True, help="Validate data and show errors next to fields")
@click.option(
    "--messages",
    "messages_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Message catalog YAML (default: <messages_dir>/<locale>.yaml)",
)
def render(model, modules, data, ignore, view, validate, messages_path):
    """Render MODEL (module:ClassName or a registered model name) as HTML."""
    model_cls = _resolve_model(model, modules)

    try:
        values = json.loads(data)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--data")
    if not isinstance(values, dict):
        raise click.BadParameter(
            f"Expected a JSON object, got {type(values).__name__}", param_hint="--data"
        )

    errors = {}
    if validate:
        try:
            instance = model_cls.model_validate(values)
        except ValidationError as e:
            errors = errors_from_validation_error(model_cls, e)
            instance = _construct(model_cls, values)
    else:
        instance = _construct(model_cls, values)

    ignore_list = parse_ignore(ignore)
    request = RenderRequest(
        model=instance,
        ignore=tuple(ignore_list) if ignore_list is not None else None,
        editable=not view,
    )

    try:
        renderer = DisplayForModel(
            messages=_load_messages(messages_path),
            errors=errors,
            settings=get_settings(),
        )
        renderer.render_to(request, lambda html: click.echo(html, nl=False))
    except DisplayFormError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def messages(path):
    """List the flattened keys of a message catalog."""
    try:
        catalog = MessageCatalog.load(path)
    except DisplayFormError as e:
        raise click.ClickException(str(e))

    for key in catalog.keys():
        click.echo(f"{key} = {catalog.get(key)}")


@cli.command()
@click.option(
    "-m",
    "--module",
    "modules",
    multiple=True,
    help="Module defining DisplayModel subclasses",
)
def models(modules):
    """List registered model names."""
    for module_name in modules:
        _import_module(module_name)

    for name in sorted(_model_registry):
        model_cls = _model_registry[name]
        click.echo(f"{name} = {model_cls.__module__}:{model_cls.__qualname__}")
