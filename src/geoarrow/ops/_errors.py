from typing import Optional


class DecodeError(ValueError):
    """A value could not be parsed as well-known binary or well-known text."""

    def __init__(self, message: str, row: Optional[int] = None) -> None:
        super().__init__(message)
        self.row = row


class EncodeError(ValueError):
    """A geometry could not be written as well-known binary or well-known
    text. Encoding failures always fail the whole call.
    """


class UnsupportedOperationError(ValueError):
    """The requested operation is unknown or has no template for the
    number of columns it was dispatched with.
    """

    def __init__(self, message: str, operation=None) -> None:
        super().__init__(message)
        self.operation = operation
