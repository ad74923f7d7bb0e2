import json
from typing import Any

from i18nbuild.classes import MessageEntry, MessageTable


def catalog_message(entry: MessageEntry) -> dict[str, Any]:
    message: dict[str, Any] = {"message": entry.text}
    if entry.description is not None:
        message["description"] = entry.description
    if entry.placeholders is not None:
        placeholders: dict[str, Any] = {}
        for placeholder in entry.placeholders:
            definition = {"content": placeholder.content}
            if placeholder.example is not None:
                definition["example"] = placeholder.example
            placeholders[placeholder.name] = definition
        message["placeholders"] = placeholders
    return message


def render_catalog(table: MessageTable) -> str:
    """Render a table as a Chrome extension messages.json document.

    Keys keep table order, fields are emitted as message, description,
    placeholders, and absent fields are left out rather than written as null.
    """
    catalog = {entry.key: catalog_message(entry) for entry in table}
    return json.dumps(catalog, indent=2, ensure_ascii=False) + "\n"
