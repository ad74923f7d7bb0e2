class I18nBuildError(Exception):
    """Base class for every failure raised while converting a messages file."""


class ParseError(I18nBuildError):
    """The raw text could not be decoded as the declared format."""

    def __init__(self, format: str, detail: str) -> None:
        super().__init__(f"Could not parse {format} messages: {detail}")
        self.format = format
        self.detail = detail


class StructuralError(I18nBuildError):
    """The decoded tree cannot be turned into a message table."""

    def __init__(self, path: str, detail: str) -> None:
        location = path or "<root>"
        super().__init__(f"{location}: {detail}")
        self.path = path
        self.detail = detail


class UnsupportedFormatError(I18nBuildError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported messages format: {name!r}")
        self.name = name
