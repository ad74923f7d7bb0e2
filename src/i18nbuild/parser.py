# Copyright (c) 2023 Peace-Maker
import logging
import re
from enum import Enum
from typing import Any, Iterator

from i18nbuild.classes import MessageEntry, MessageTable, PlaceholderDef
from i18nbuild.errors import StructuralError
from i18nbuild.formats import Deserializer

logger = logging.getLogger(__name__)

PLURAL_SEPARATOR = " | "
CHROME_KEYS = ("message", "description", "placeholders")

_plural_key_regex = re.compile(r"[0-9]+|n")
_substitution_regex = re.compile(r"\$([1-9])")


class NodeKind(Enum):
    LEAF = "leaf"
    CHROME = "chrome"
    PLURAL = "plural"
    GROUP = "group"


def classify(node: Any) -> NodeKind:
    """Decide how a node of the decoded tree becomes messages.

    Maps are checked in a fixed order: a "message" field makes a Chrome
    message, keys that are all counts or "n" make a plural message, anything
    else is a group of nested messages. Sequences are always groups.
    """
    if isinstance(node, dict):
        keys = [_key_text(key) for key in node]
        if "message" in keys:
            return NodeKind.CHROME
        if all(_plural_key_regex.fullmatch(key) for key in keys):
            return NodeKind.PLURAL
        return NodeKind.GROUP
    if isinstance(node, list):
        return NodeKind.GROUP
    return NodeKind.LEAF


def parse(raw_text: str, deserializer: Deserializer) -> MessageTable:
    tree = deserializer.deserialize(raw_text)
    return normalize(tree)


def normalize(tree: Any) -> MessageTable:
    """Flatten a decoded messages tree into a MessageTable.

    The root is always a group, even if it looks like a single message. An
    empty document produces an empty table.
    """
    if tree is None:
        logger.warning("Messages document is empty")
        return MessageTable()
    if classify(tree) is NodeKind.LEAF:
        raise StructuralError(
            "", f"expected a mapping at the top level, got {type(tree).__name__}"
        )

    entries: list[MessageEntry] = []
    sources: dict[str, str] = {}
    for path, entry in _walk(tree):
        if entry.key in sources:
            raise StructuralError(
                _dotted(path),
                f"key {entry.key} collides with {sources[entry.key]}",
            )
        sources[entry.key] = _dotted(path)
        entries.append(entry)
    logger.debug(f"Normalized {len(entries)} messages")
    return MessageTable(tuple(entries))


def _children(node: dict | list) -> Iterator[tuple[Any, Any]]:
    if isinstance(node, list):
        return iter(enumerate(node))
    return iter(node.items())


def _walk(root: dict | list) -> Iterator[tuple[list[str], MessageEntry]]:
    """Yield (path, entry) pairs depth-first.

    Groups are expanded with an explicit stack so deeply nested documents do
    not exhaust the interpreter stack.
    """
    stack: list[tuple[list[str], Iterator[tuple[Any, Any]]]] = [([], _children(root))]
    while stack:
        path, children = stack[-1]
        for key, child in children:
            child_path = path + [_key_text(key)]
            kind = classify(child)
            if kind is NodeKind.GROUP:
                stack.append((child_path, _children(child)))
                break
            if kind is NodeKind.LEAF:
                yield child_path, _leaf_entry(child_path, child)
            elif kind is NodeKind.CHROME:
                yield child_path, _chrome_entry(child_path, child)
            else:
                yield child_path, _plural_entry(child_path, child)
        else:
            stack.pop()


def _flatten_key(path: list[str]) -> str:
    return ".".join(path).replace(".", "_")


def _dotted(path: list[str]) -> str:
    return ".".join(path)


def _key_text(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _scalar_text(path: list[str], value: Any, what: str = "message") -> str:
    if value is None:
        raise StructuralError(_dotted(path), f"{what} is empty")
    if isinstance(value, (dict, list)):
        raise StructuralError(
            _dotted(path), f"{what} must be a string, got {type(value).__name__}"
        )
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def count_substitutions(*texts: str) -> int:
    """Highest positional substitution ($1 to $9) referenced by any text."""
    found = [
        int(match) for text in texts for match in _substitution_regex.findall(text)
    ]
    return max(found, default=0)


def _leaf_entry(path: list[str], node: Any) -> MessageEntry:
    text = _scalar_text(path, node)
    return MessageEntry(
        key=_flatten_key(path),
        text=text,
        substitutions=count_substitutions(text),
    )


def _chrome_entry(path: list[str], node: dict) -> MessageEntry:
    fields = {_key_text(key): value for key, value in node.items()}
    for unknown in [key for key in fields if key not in CHROME_KEYS]:
        logger.warning(
            f'Ignoring unknown field "{unknown}" of message {_dotted(path)}'
        )

    text = _scalar_text(path + ["message"], fields["message"])
    description = None
    if fields.get("description") is not None:
        description = _scalar_text(
            path + ["description"], fields["description"], "description"
        )

    placeholders = None
    if fields.get("placeholders") is not None:
        placeholders = _placeholders(path + ["placeholders"], fields["placeholders"])

    contents = [placeholder.content for placeholder in placeholders or ()]
    return MessageEntry(
        key=_flatten_key(path),
        text=text,
        description=description,
        placeholders=placeholders,
        substitutions=count_substitutions(text, *contents),
    )


def _placeholders(path: list[str], node: Any) -> tuple[PlaceholderDef, ...]:
    if not isinstance(node, dict):
        raise StructuralError(_dotted(path), "placeholders must be a mapping")

    result: dict[str, PlaceholderDef] = {}
    for raw_name, definition in node.items():
        name = _key_text(raw_name).lower()
        placeholder_path = path + [_key_text(raw_name)]
        if not isinstance(definition, dict) or definition.get("content") is None:
            raise StructuralError(
                _dotted(placeholder_path), 'placeholder needs a "content" field'
            )
        if name in result:
            logger.warning(
                f'Dropping duplicate placeholder "{raw_name}" in {_dotted(path)}'
            )
            continue

        content = _scalar_text(
            placeholder_path + ["content"], definition["content"], "content"
        )
        example = definition.get("example")
        if example is not None:
            example = _scalar_text(placeholder_path + ["example"], example, "example")
        result[name] = PlaceholderDef(name=name, content=content, example=example)
    return tuple(result.values())


def _plural_sort_key(count: str) -> tuple[int, int]:
    if count == "n":
        return (1, 0)
    return (0, int(count))


def _plural_entry(path: list[str], node: dict) -> MessageEntry:
    if not node:
        raise StructuralError(_dotted(path), "plural message has no variants")

    variants = []
    for raw_count, variant_text in node.items():
        count = _key_text(raw_count)
        variants.append((count, _scalar_text(path + [count], variant_text)))
    variants.sort(key=lambda variant: _plural_sort_key(variant[0]))
    text = PLURAL_SEPARATOR.join(variant for _, variant in variants)
    return MessageEntry(
        key=_flatten_key(path),
        text=text,
        is_plural=True,
        plural_count=True,
        variants=tuple(variants),
        substitutions=count_substitutions(text),
    )
