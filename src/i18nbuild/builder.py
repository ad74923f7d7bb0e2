"""File level helpers around the parse and render functions.

Every helper renders all of its outputs in memory before the first write, so a
failing source never leaves half of the artifacts behind. Writes go through a
``write(path, text, encoding)`` callable that defaults to write_text().
"""

import logging
import pathlib
from typing import Callable

from i18nbuild.catalog import render_catalog
from i18nbuild.classes import MessageTable
from i18nbuild.declaration import DEFAULT_SUBSTITUTION_TYPE, render_declaration
from i18nbuild.errors import I18nBuildError, ParseError
from i18nbuild.formats import deserializer_for, supported_extensions
from i18nbuild.parser import parse

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf8"
CATALOG_FILENAME = "messages.json"

Writer = Callable[[str | pathlib.Path, str, str], None]


def write_text(path: str | pathlib.Path, text: str, encoding: str) -> None:
    file = pathlib.Path(path)
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_text(text, encoding=encoding)


def parse_messages_file(
    path: str | pathlib.Path, encoding: str = DEFAULT_ENCODING
) -> MessageTable:
    file = pathlib.Path(path)
    deserializer = deserializer_for(file)
    logger.debug(f"Parsing {file} as {deserializer.name}")
    try:
        text = file.read_text(encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(
            deserializer.name, f"{file.name} is not {encoding}: {exc}"
        ) from exc
    return parse(text, deserializer)


def generate_chrome_messages_file(
    path: str | pathlib.Path,
    table: MessageTable,
    write: Writer = write_text,
    encoding: str = DEFAULT_ENCODING,
) -> None:
    write(path, render_catalog(table), encoding)


def generate_declaration_file(
    path: str | pathlib.Path,
    table: MessageTable,
    interface_name: str,
    substitution_type: str = DEFAULT_SUBSTITUTION_TYPE,
    write: Writer = write_text,
    encoding: str = DEFAULT_ENCODING,
) -> None:
    write(path, render_declaration(table, interface_name, substitution_type), encoding)


def build(
    source: str | pathlib.Path,
    catalog_path: str | pathlib.Path,
    declaration_path: str | pathlib.Path,
    interface_name: str,
    substitution_type: str = DEFAULT_SUBSTITUTION_TYPE,
    write: Writer = write_text,
    encoding: str = DEFAULT_ENCODING,
) -> MessageTable:
    """Convert one messages file into a catalog and a declaration file."""
    table = parse_messages_file(source, encoding)
    catalog = render_catalog(table)
    declaration = render_declaration(table, interface_name, substitution_type)

    write(catalog_path, catalog, encoding)
    write(declaration_path, declaration, encoding)
    logger.info(f"Built {len(table)} messages from {source}")
    return table


def discover_locales(locales_dir: str | pathlib.Path) -> dict[str, pathlib.Path]:
    """Map each locale to its source file, e.g. "pt_BR" -> locales/pt_BR.yml."""
    extensions = supported_extensions()
    found: dict[str, pathlib.Path] = {}
    for file in sorted(pathlib.Path(locales_dir).iterdir()):
        if not file.is_file() or file.suffix.lower() not in extensions:
            continue
        locale = file.stem
        if locale in found:
            raise I18nBuildError(
                f"Locale {locale} has more than one source: "
                f"{found[locale].name}, {file.name}"
            )
        found[locale] = file

    logger.info(f"Found {len(found)} locales in {locales_dir}")
    return found


def build_locales(
    locales_dir: str | pathlib.Path,
    out_dir: str | pathlib.Path,
    default_locale: str,
    declaration_path: str | pathlib.Path | None = None,
    interface_name: str = "I18n",
    substitution_type: str = DEFAULT_SUBSTITUTION_TYPE,
    write: Writer = write_text,
    encoding: str = DEFAULT_ENCODING,
) -> list[pathlib.Path]:
    """Build _locales/<locale>/messages.json for every locale file.

    The declaration, when requested, describes the default locale. Nothing is
    written unless every locale parses.

    Returns:
        The paths that were written, catalogs first.
    """
    sources = discover_locales(locales_dir)
    if default_locale not in sources:
        raise I18nBuildError(
            f"Default locale {default_locale} not found in {locales_dir}"
        )

    outputs: list[tuple[pathlib.Path, str]] = []
    declaration_output: tuple[pathlib.Path, str] | None = None
    for locale, source in sources.items():
        table = parse_messages_file(source, encoding)
        path = pathlib.Path(out_dir) / "_locales" / locale / CATALOG_FILENAME
        outputs.append((path, render_catalog(table)))
        if locale == default_locale and declaration_path is not None:
            declaration = render_declaration(table, interface_name, substitution_type)
            declaration_output = (pathlib.Path(declaration_path), declaration)

    if declaration_output is not None:
        outputs.append(declaration_output)

    for path, text in outputs:
        write(path, text, encoding)
    logger.info(f"Wrote {len(outputs)} files for {len(sources)} locales")
    return [path for path, _ in outputs]
