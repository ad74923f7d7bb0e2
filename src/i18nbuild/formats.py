"""Deserializers for the supported messages file formats.

Each format is a small Deserializer object that turns raw text into a tree of
dicts, lists and scalars. Callers pick one with deserializer_for(), either by
file path (the extension decides) or by format name.
"""

import json
import logging
import pathlib
import tomllib
from abc import ABC, abstractmethod
from typing import Any

import json5
import vdf
import yaml

from i18nbuild.errors import ParseError, UnsupportedFormatError

logger = logging.getLogger(__name__)


class Deserializer(ABC):
    name: str = ""
    extensions: tuple[str, ...] = ()

    @abstractmethod
    def _load(self, text: str) -> Any:
        pass

    def deserialize(self, text: str) -> Any:
        """Decode text into a generic tree.

        Raises:
            ParseError: If the text is not valid for this format.
        """
        try:
            return self._load(text)
        except ParseError:
            raise
        except Exception as ex:
            logger.debug(f"{self.name} decoder rejected input: {ex}")
            raise ParseError(self.name, str(ex)) from ex


class YamlDeserializer(Deserializer):
    name = "yaml"
    extensions = (".yml", ".yaml")

    def _load(self, text: str) -> Any:
        return yaml.safe_load(text)


class TomlDeserializer(Deserializer):
    name = "toml"
    extensions = (".toml",)

    def _load(self, text: str) -> Any:
        return tomllib.loads(text)


class JsonDeserializer(Deserializer):
    name = "json"
    extensions = (".json",)

    def _load(self, text: str) -> Any:
        return json.loads(text)


class JsoncDeserializer(Deserializer):
    """JSON with // and /* */ comments, decoded by the JSON5 parser."""

    name = "jsonc"
    extensions = (".jsonc",)

    def _load(self, text: str) -> Any:
        return json5.loads(text)


class Json5Deserializer(Deserializer):
    name = "json5"
    extensions = (".json5",)

    def _load(self, text: str) -> Any:
        return json5.loads(text)


class VdfDeserializer(Deserializer):
    """Valve KeyValues text, the format SourceMod phrase files use."""

    name = "vdf"
    extensions = (".vdf",)

    def _load(self, text: str) -> Any:
        return vdf.loads(text)


DESERIALIZERS: tuple[Deserializer, ...] = (
    YamlDeserializer(),
    TomlDeserializer(),
    JsonDeserializer(),
    JsoncDeserializer(),
    Json5Deserializer(),
    VdfDeserializer(),
)


def supported_extensions() -> list[str]:
    return [ext for deserializer in DESERIALIZERS for ext in deserializer.extensions]


def deserializer_for(source: str | pathlib.Path) -> Deserializer:
    """Pick the deserializer for a file path or a bare format name.

    "messages.yml", "yml" and "yaml" all select the YAML deserializer.
    """
    if isinstance(source, pathlib.Path) or "." in str(source):
        wanted = pathlib.PurePath(source).suffix.lower()
    else:
        wanted = f".{str(source).lower()}"

    for deserializer in DESERIALIZERS:
        if wanted in deserializer.extensions or wanted == f".{deserializer.name}":
            return deserializer
    raise UnsupportedFormatError(str(source))
