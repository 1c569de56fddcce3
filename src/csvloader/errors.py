"""Loader error hierarchy.

Every failure surfaced by the pipeline is a LoaderError. Stages add a short
static label on the way up (``err.wrap("decode")``) so the final message
reads outermost stage first, e.g. ``load: decode: line 3, column "age": ...``.
"""


class LoaderError(Exception):
    """Base class for all loader failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.labels: list[str] = []

    def wrap(self, label: str) -> "LoaderError":
        """Prefix the error with a stage label and return it for re-raising."""
        self.labels.insert(0, label)
        return self

    def __str__(self) -> str:
        return ": ".join([*self.labels, self.message])


class ConfigurationError(LoaderError):
    """A required setting is missing or invalid."""


class StreamAcquisitionError(LoaderError):
    """The source stream could not be opened or read."""


class ParseError(LoaderError):
    """A field's text does not match its declared type, or the text is malformed."""


class UnsupportedTypeError(LoaderError):
    """A declared type tag is outside the recognized set."""

    def __init__(self, type_tag: str):
        super().__init__(f"unsupported type {type_tag!r}")
        self.type_tag = type_tag


class SchemaError(LoaderError):
    """Header, type and data rows do not line up."""


class WriteError(LoaderError):
    """The destination rejected the batch."""
