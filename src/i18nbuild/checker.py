# Copyright (c) 2023 Peace-Maker
from collections import defaultdict
import logging
import pathlib

from i18nbuild.builder import DEFAULT_ENCODING, discover_locales, parse_messages_file
from i18nbuild.classes import MessageTable, Report
from i18nbuild.errors import I18nBuildError

logger = logging.getLogger(__name__)


def compare(
    locale: str, filename: str, table: MessageTable, baseline: MessageTable
) -> list[Report]:
    """Compare one locale's messages with the default locale's messages."""
    reports = []

    if not len(table):
        return [Report(locale, filename, file_warning="File is empty")]

    # See if this locale has anything the default locale doesn't
    for entry in table:
        baseline_entry = baseline.get(entry.key)
        if baseline_entry is None:
            reports.append(
                Report(
                    locale,
                    filename,
                    message_key=entry.key,
                    message_warning="Message doesn't exist in the default locale",
                )
            )
            continue
        if entry.is_plural != baseline_entry.is_plural:
            expected = "plural" if baseline_entry.is_plural else "not plural"
            reports.append(
                Report(
                    locale,
                    filename,
                    message_key=entry.key,
                    message_warning=f"Message is {expected} in the default locale",
                )
            )
        if entry.substitutions != baseline_entry.substitutions:
            reports.append(
                Report(
                    locale,
                    filename,
                    message_key=entry.key,
                    message_warning=f"Has {entry.substitutions} substitutions, but the default locale has {baseline_entry.substitutions}",
                )
            )

    # See if this locale is missing anything the default locale has
    for entry in baseline:
        if entry.key not in table:
            reports.append(
                Report(
                    locale,
                    filename,
                    message_key=entry.key,
                    message_warning="Message missing",
                )
            )
    return reports


def check_locales(
    sources: dict[str, pathlib.Path],
    default_locale: str,
    encoding: str = DEFAULT_ENCODING,
) -> dict[str, list[Report]]:
    """Check every locale file against the default locale.

    Files that fail to parse are reported instead of aborting the check.

    Returns:
        Reports grouped by locale. Locales without issues are left out.
    """
    if default_locale not in sources:
        raise I18nBuildError(f"Default locale {default_locale} has no source file")

    baseline = parse_messages_file(sources[default_locale], encoding)
    reports: dict[str, list[Report]] = defaultdict(list)

    for locale, source in sources.items():
        if locale == default_locale:
            continue
        try:
            table = parse_messages_file(source, encoding)
        except I18nBuildError as ex:
            logger.error(f"Error parsing {source.name}: {ex}")
            reports[locale].append(Report(locale, source.name, file_warning=str(ex)))
            continue

        found = compare(locale, source.name, table, baseline)
        if found:
            logger.error(f"Found {len(found)} issues for {locale}")
            reports[locale].extend(found)
        else:
            logger.info(f"No issues found for {locale}")

    return dict(reports)


def render_report_markdown(reports: dict[str, list[Report]]) -> str:
    if not reports:
        return "No issues found\n"

    markdown = ""
    for locale, problems in reports.items():
        markdown += f"## {locale}\n"
        added_message_warning = False
        for report in problems:
            if report.file_warning:
                markdown += f"**{report.filename}: {report.file_warning}**\n"
            if report.message_warning:
                if not added_message_warning:
                    markdown += "| Message | Issue |\n| ------- | --------- |\n"
                    added_message_warning = True
                markdown += f"| `{report.message_key}` | {report.message_warning} |\n"
        markdown += "\n"
    return markdown


def run(
    *,
    locales_dir: str | pathlib.Path,
    default_locale: str,
    encoding: str = DEFAULT_ENCODING,
) -> dict[str, list[Report]]:
    logger.info(f"Checking locales in {locales_dir}...")
    sources = discover_locales(locales_dir)
    return check_locales(sources, default_locale, encoding)
