"""Order flow error types."""


class OrderflowError(Exception):
    """Base class for errors raised outside the per-bar engine."""


class BarOrderError(OrderflowError):
    """
    Raised by a host when bars arrive out of chronological order.

    Attributes:
        index: Index of the offending bar.
        previous_index: Index of the bar processed just before it.
    """

    def __init__(self, message: str, index: int, previous_index: int) -> None:
        super().__init__(message)
        self.index = index
        self.previous_index = previous_index
