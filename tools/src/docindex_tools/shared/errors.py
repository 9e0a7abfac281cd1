"""Exception types shared by the doc index tools."""


class DocIndexError(Exception):
    """Base class for doc index failures."""


class DocIndexParseError(DocIndexError, ValueError):
    """
    Raised when a generated data file does not have the expected shape.

    `source` is the file the text came from (if known); `line` and `column`
    are 1-based positions in that text.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ):
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        location = []
        if self.source:
            location.append(self.source)
        if self.line is not None:
            location.append(str(self.line))
            if self.column is not None:
                location.append(str(self.column))
        if location:
            return f"{':'.join(location)}: {self.message}"
        return self.message

    def with_source(self, source: str) -> "DocIndexParseError":
        """Return a copy of this error attributed to `source`."""
        return type(self)(self.message, source, self.line, self.column)


class JsLiteralError(DocIndexParseError):
    """Raised by the JS literal reader on malformed input."""
