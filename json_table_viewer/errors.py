from __future__ import annotations


class JsonTableViewerError(Exception):
    """Base class for errors raised by json_table_viewer."""


class ParseError(JsonTableViewerError):
    """Input text is not a JSON document we accept.

    `message` is the parser's own message, unchanged, so the UI can show it
    as-is.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
