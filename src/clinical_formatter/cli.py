"""Command line interface for clinical-formatter."""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import click
import yaml
from click_default_group import DefaultGroup

from clinical_formatter import __version__
from clinical_formatter.address import InMemoryAddressSupport
from clinical_formatter.catalog import InMemoryMessageCatalog
from clinical_formatter.config import FormatterSettings, InMemoryConfigStore
from clinical_formatter.datamodel import get_model_class
from clinical_formatter.errors import FormatterError
from clinical_formatter.formatter import Formatter

__all__ = [
    "main",
]

locale_option = click.option("-L", "--locale", help="Locale to format in, e.g. en_GB.")
messages_option = click.option(
    "--messages", type=click.Path(exists=True), help="YAML file of messages by locale."
)
properties_option = click.option(
    "--properties", type=click.Path(exists=True), help="YAML file of global properties."
)
templates_option = click.option(
    "--templates", type=click.Path(exists=True), help="YAML file of address templates."
)
settings_option = click.option(
    "--settings", type=click.Path(exists=True), help="YAML file of formatter settings."
)


def load_object(obj: Any) -> Any:
    """
    Build datamodel objects from parsed YAML.

    Any mapping with a ``type`` key becomes an instance of that datamodel class.

    :param obj:
    :return:
    """
    if isinstance(obj, dict):
        obj = {k: load_object(v) for k, v in obj.items()}
        if "type" in obj:
            typ = obj.pop("type")
            return get_model_class(typ)(**obj)
        return obj
    if isinstance(obj, list):
        return [load_object(v) for v in obj]
    return obj


def make_formatter(
    messages: Optional[str] = None,
    properties: Optional[str] = None,
    templates: Optional[str] = None,
    settings: Optional[str] = None,
) -> Formatter:
    formatter_settings = FormatterSettings()
    if settings:
        formatter_settings.load_config(settings)
    kwargs: Dict[str, Any] = {}
    if messages:
        kwargs["message_catalog"] = InMemoryMessageCatalog.from_yaml(
            messages, default_locale=formatter_settings.locale
        )
    if properties:
        kwargs["config_store"] = InMemoryConfigStore.from_yaml(properties)
    if templates:
        kwargs["template_provider"] = InMemoryAddressSupport.from_yaml(templates)
    return Formatter.from_settings(formatter_settings, **kwargs)


@click.group(
    cls=DefaultGroup,
    default="format",
    default_if_no_args=False,
)
@click.option("-v", "--verbose", count=True)
@click.option("-q", "--quiet", is_flag=True)
@click.version_option(__version__)
def main(verbose: int, quiet: bool):
    """CLI for clinical-formatter.

    :param verbose: Verbosity while running.
    :param quiet: Boolean to be quiet or verbose.
    """
    logging.basicConfig()
    logger = logging.root
    if verbose >= 2:
        logger.setLevel(level=logging.DEBUG)
    elif verbose == 1:
        logger.setLevel(level=logging.INFO)
    else:
        logger.setLevel(level=logging.WARNING)
    if quiet:
        logger.setLevel(level=logging.ERROR)
    logger.info(f"Logger {logger.name} set to level {logger.level}")


@main.command(name="format")
@locale_option
@messages_option
@properties_option
@templates_option
@settings_option
@click.argument("input_file", type=click.File("r"))
def format_object(input_file, locale, **kwargs):
    """Format a domain object described in YAML.

    Example:

        clinical-formatter format -L fr user.yaml

    where user.yaml is:

    \b
        type: User
        username: jdoe
        person:
          type: Person
          names:
            - given_name: Jane
              family_name: Doe
    """
    formatter = make_formatter(**kwargs)
    obj = load_object(yaml.safe_load(input_file))
    try:
        click.echo(formatter.format(obj, locale))
    except FormatterError as e:
        raise click.ClickException(str(e)) from e


@main.command(name="date")
@locale_option
@properties_option
@settings_option
@click.argument("value")
def format_date(value, locale, **kwargs):
    """Format an ISO-8601 date or datetime.

    Example:

        clinical-formatter date -L de 2024-03-01T14:30:00
    """
    formatter = make_formatter(**kwargs)
    try:
        timestamp = datetime.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="VALUE") from e
    click.echo(formatter.format(timestamp, locale))


@main.command(name="address")
@locale_option
@properties_option
@templates_option
@settings_option
@click.argument("input_file", type=click.File("r"))
def format_address(input_file, locale, **kwargs):
    """Render an address from a YAML mapping of address fields.

    Without --templates the built-in default layout is used.

    Example:

        clinical-formatter address --templates templates.yaml address.yaml
    """
    formatter = make_formatter(**kwargs)
    if formatter.template_provider is None:
        formatter = Formatter(
            config_store=formatter.config_store,
            template_provider=InMemoryAddressSupport(),
            settings=formatter.settings,
        )
    address = yaml.safe_load(input_file) or {}
    try:
        click.echo(formatter.address_resolver.format(address, locale))
    except FormatterError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
