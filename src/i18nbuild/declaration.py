import json

from i18nbuild.classes import MessageEntry, MessageTable

DEFAULT_SUBSTITUTION_TYPE = 'import("@wxt-dev/i18n").Substitution'
INDENT = "  "


def _quote(text: str) -> str:
    # keep the doc comment open
    return json.dumps(text, ensure_ascii=False).replace("*/", "*\\/")


def _doc_lines(entry: MessageEntry) -> list[str]:
    if entry.is_plural and entry.variants is not None:
        return [f"{_quote(count)}: {_quote(text)}" for count, text in entry.variants]
    return [_quote(entry.text)]


def _signature(entry: MessageEntry, substitution_type: str) -> str:
    params = [f"key: {_quote(entry.key)}"]
    if entry.plural_count:
        params.append("count: number")
    params.append(f"sub?: {substitution_type}[]")
    return f"t({', '.join(params)}): string"


def render_declaration(
    table: MessageTable,
    interface_name: str,
    substitution_type: str = DEFAULT_SUBSTITUTION_TYPE,
) -> str:
    """Render a TypeScript interface with one t() overload per message.

    Plural messages take a required numeric count before the optional
    substitution list. Each overload is documented with the message text, or
    with one line per count for plural messages.
    """
    lines = [f"interface {interface_name} {{"]
    for entry in table:
        lines.append(f"{INDENT}/**")
        lines.extend(f"{INDENT} * {line}" for line in _doc_lines(entry))
        lines.append(f"{INDENT} */")
        lines.append(f"{INDENT}{_signature(entry, substitution_type)}")
    lines.append("}")
    return "\n".join(lines) + "\n"
