import logging
import os
import sys
from typing import Any

import yaml

import click
from i18nbuild import builder, checker
from i18nbuild.declaration import DEFAULT_SUBSTITUTION_TYPE
from i18nbuild.errors import I18nBuildError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "build": {
        "interface_name": "I18n",
        "substitution_type": DEFAULT_SUBSTITUTION_TYPE,
        "default_locale": "en",
        "encoding": builder.DEFAULT_ENCODING,
    },
}


def load_config(config_folder: str) -> dict[str, dict[str, Any]]:
    """Read <config_folder>/config.yml on top of the built-in defaults."""
    config_file_path = os.path.abspath(f"{config_folder}/config.yml")

    loaded: Any = {}
    try:
        with open(config_file_path, "r") as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.error(f"Config file {config_file_path} not found, using defaults.")
    except yaml.YAMLError as exc:
        logger.error(f"load_config {exc}")
        sys.exit(1)

    if not isinstance(loaded, dict):
        logger.error(f"load_config {config_file_path} must contain a mapping")
        sys.exit(1)

    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    for section, values in loaded.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)
    return config


@click.group()
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.version_option()
@click.pass_context
def cli(ctx: click.Context, config_folder: str) -> None:
    config = load_config(config_folder)
    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )
    ctx.obj = config


@cli.command("build")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--catalog-out", required=True, help="Where to write messages.json.")
@click.option(
    "--declaration-out", required=True, help="Where to write the .d.ts declaration."
)
@click.option("--interface-name", default=None, help="Name of the generated interface.")
@click.option("--substitution-type", default=None, help="Type used for substitutions.")
@click.pass_obj
def build(
    config: dict[str, dict[str, Any]],
    source: str,
    catalog_out: str,
    declaration_out: str,
    interface_name: str | None,
    substitution_type: str | None,
) -> None:
    settings = config["build"]
    try:
        builder.build(
            source,
            catalog_out,
            declaration_out,
            interface_name or settings["interface_name"],
            substitution_type or settings["substitution_type"],
            encoding=settings["encoding"],
        )
    except I18nBuildError as exc:
        logger.error(f"Failed to build {source}: {exc}")
        sys.exit(1)


@cli.command("build-locales")
@click.argument("locales_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--out-dir", required=True, help="Extension output directory.")
@click.option("--default-locale", default=None, help="Locale used for the declaration.")
@click.option("--declaration-out", default=None, help="Where to write the declaration.")
@click.option("--interface-name", default=None, help="Name of the generated interface.")
@click.option("--substitution-type", default=None, help="Type used for substitutions.")
@click.pass_obj
def build_locales(
    config: dict[str, dict[str, Any]],
    locales_dir: str,
    out_dir: str,
    default_locale: str | None,
    declaration_out: str | None,
    interface_name: str | None,
    substitution_type: str | None,
) -> None:
    settings = config["build"]
    try:
        builder.build_locales(
            locales_dir,
            out_dir,
            default_locale or settings["default_locale"],
            declaration_path=declaration_out,
            interface_name=interface_name or settings["interface_name"],
            substitution_type=substitution_type or settings["substitution_type"],
            encoding=settings["encoding"],
        )
    except I18nBuildError as exc:
        logger.error(f"Failed to build {locales_dir}: {exc}")
        sys.exit(1)


@cli.command("check")
@click.argument("locales_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--default-locale", default=None, help="Locale the others must match.")
@click.option("--report", default=None, help="Write a markdown report to this path.")
@click.pass_obj
def check(
    config: dict[str, dict[str, Any]],
    locales_dir: str,
    default_locale: str | None,
    report: str | None,
) -> None:
    settings = config["build"]
    try:
        reports = checker.run(
            locales_dir=locales_dir,
            default_locale=default_locale or settings["default_locale"],
            encoding=settings["encoding"],
        )
    except I18nBuildError as exc:
        logger.error(f"Failed to check {locales_dir}: {exc}")
        sys.exit(1)

    markdown = checker.render_report_markdown(reports)
    if report:
        builder.write_text(report, markdown, settings["encoding"])
    else:
        click.echo(markdown, nl=False)

    if reports:
        sys.exit(1)
