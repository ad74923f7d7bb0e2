"""Shared fixtures for the i18nbuild test suite.

Hypothesis runs with the "dev" profile locally and the faster, derandomized
"ci" profile when CI=true (override with HYPOTHESIS_PROFILE).
"""

import os

import pytest
from hypothesis import settings

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)
settings.load_profile(
    os.environ.get("HYPOTHESIS_PROFILE")
    or ("ci" if os.environ.get("CI") == "true" else "dev")
)


@pytest.fixture
def messages_tree():
    """A source tree with every kind of message node."""
    return {
        "simple": "example",
        "sub": "Hello $1",
        "nested": {
            "example": "This is nested",
            "array": ["One", "Two"],
            "chrome1": {"message": "test 1"},
            "chrome2": {"message": "test 2", "description": "test"},
            "chrome3": {
                "message": "Hello $NAME$, please visit $URL$",
                "description": "Label and link to a URL",
                "placeholders": {
                    "url": {"content": "https://wxt.dev"},
                    "name": {"content": "$1", "example": "Aaron"},
                },
            },
            "chrome4": {
                "message": "Visit: $URL$",
                "placeholders": {"url": {"content": "https://wxt.dev"}},
            },
        },
        "plural0": {0: "Zero items", 1: "One item", "n": "$1 items"},
        "plural1": {1: "One item", "n": "$1 items"},
        "pluralN": {"n": "$1 items"},
        "pluralSub": {
            1: "Hello $2, I have one problem",
            "n": "Hello $2, I have $1 problems",
        },
    }


@pytest.fixture
def recording_writer():
    """A write(path, text, encoding) stand-in that records every call."""
    calls = []

    def write(path, text, encoding):
        calls.append((path, text, encoding))

    write.calls = calls
    return write


@pytest.fixture
def locales_dir(tmp_path):
    """A locales directory with an English baseline and two translations.

    - en.yml: the default locale
    - de.json5: complete and consistent
    - fr.toml: missing a message, one extra message, one plural mismatch
    """
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "en.yml").write_text(
        "greeting: Hello $1\n"
        "items:\n"
        "  1: One item\n"
        "  n: $1 items\n"
        "bye: Goodbye\n",
        encoding="utf8",
    )
    (directory / "de.json5").write_text(
        "{\n"
        "  // German\n"
        "  greeting: 'Hallo $1',\n"
        "  items: {'1': 'Ein Artikel', n: '$1 Artikel'},\n"
        "  bye: 'Tschüss',\n"
        "}\n",
        encoding="utf8",
    )
    (directory / "fr.toml").write_text(
        'greeting = "Bonjour $1"\n'
        'items = "articles"\n'
        'extra = "En plus"\n',
        encoding="utf8",
    )
    return directory
