from dataclasses import dataclass, field
from typing import Iterator

from i18nbuild.errors import StructuralError


@dataclass(frozen=True)
class PlaceholderDef:
    name: str
    content: str
    example: str | None = None


@dataclass(frozen=True)
class MessageEntry:
    key: str
    text: str
    description: str | None = None
    placeholders: tuple[PlaceholderDef, ...] | None = None
    is_plural: bool = False
    plural_count: bool = False
    variants: tuple[tuple[str, str], ...] | None = None
    substitutions: int = 0


@dataclass(frozen=True)
class MessageTable:
    """Flat, ordered list of messages shared by every generator.

    Entries keep the depth-first order of the source tree. Building a table
    with two entries for the same key raises StructuralError.
    """

    entries: tuple[MessageEntry, ...] = ()
    _index: dict[str, MessageEntry] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index: dict[str, MessageEntry] = {}
        for entry in self.entries:
            if entry.key in index:
                raise StructuralError(entry.key, "duplicate message key")
            index[entry.key] = entry
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "_index", index)

    def __iter__(self) -> Iterator[MessageEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    def get(self, key: str) -> MessageEntry | None:
        return self._index.get(key)


@dataclass
class Report:
    locale: str
    filename: str
    file_warning: str = ""
    message_key: str = ""
    message_warning: str = ""
