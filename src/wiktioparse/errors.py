"""Exception types raised by wiktioparse."""


class WiktioParseError(Exception):
    """Base class for all wiktioparse errors."""


class SchemaError(WiktioParseError):
    """Raised when the taxonomy file is missing or invalid."""


class SpliceError(WiktioParseError):
    """Raised when a translation subpage cannot be spliced into its host."""

    def __init__(self, title: str, reason: str):
        super().__init__(f"Cannot splice translations from {title!r}: {reason}")
        self.title = title
        self.reason = reason
