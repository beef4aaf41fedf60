"""Exception classes for range construction and parsing."""

from __future__ import annotations


class RangeError(Exception):
    """Base exception for all rangealgebra errors."""


class ParseError(RangeError):
    """Raised when a range expression cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the problem.
    line : int | None
        Line number of the offending input (1-based), if known.
    column : int | None
        Column number of the offending input (1-based), if known.
    text : str | None
        The expression that failed to parse.

    Examples
    --------
    >>> error = ParseError("unexpected token", line=1, column=4, text="(1,, 2)")
    >>> str(error)
    'unexpected token at line 1, column 4\\n  (1,, 2)'
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        text: str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.text = text
        super().__init__(self._format())

    def with_text(self, text: str) -> ParseError:
        """Return a copy of this error that quotes ``text`` as the failing expression."""
        error = self.__class__.__new__(self.__class__)
        error.__dict__.update(self.__dict__)
        error.text = text
        error.args = (error._format(),)
        return error

    def _format(self) -> str:
        result = self.message
        if self.line is not None:
            result += f" at line {self.line}"
            if self.column is not None:
                result += f", column {self.column}"
        elif self.column is not None:
            result += f" at column {self.column}"
        if self.text is not None:
            result += f"\n  {self.text}"
        return result


class ConversionError(ParseError):
    """Raised when a literal value cannot be converted to the element type.

    Parameters
    ----------
    message : str
        Description of the problem.
    value : str
        The literal text handed to the converter.
    line : int | None
        Line number of the literal, if known.
    column : int | None
        Column number of the literal, if known.
    text : str | None
        The expression being parsed.
    """

    def __init__(
        self,
        message: str,
        value: str,
        line: int | None = None,
        column: int | None = None,
        text: str | None = None,
    ) -> None:
        self.value = value
        super().__init__(message, line=line, column=column, text=text)
