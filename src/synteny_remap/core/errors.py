"""
Fatal error conditions raised while rebuilding synteny groups.

Anything raised from here aborts the run: the match stream and the
sequence files disagree and there is no partial recovery.
"""


class SyntenyRemapError(ValueError):
    """Base class for all fatal input errors."""


class EmptyReferenceError(SyntenyRemapError):
    """The reference FASTA yielded no sequences."""


class InputFormatError(SyntenyRemapError):
    """The match stream does not follow the header/separator/match grammar."""

    def __init__(self, message: str, line_number: int = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class CoordinateRangeError(SyntenyRemapError):
    """A global reference coordinate lies past the concatenated reference."""


class DuplicateReferenceError(SyntenyRemapError):
    """Two reference records share an identifier but not a length."""


class StraddlingClusterError(SyntenyRemapError):
    """A single cluster resolved to two different reference sequences."""


class QueryOrderError(SyntenyRemapError):
    """A query header could not be found by reading the query FASTA forward."""
