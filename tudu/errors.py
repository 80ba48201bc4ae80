"""Exception hierarchy shared across tudu."""


class TuduError(Exception):
    """Base class for all tudu errors."""


class ConfigError(TuduError):
    """Invalid setting in the environment or on the command line."""


class StorageError(TuduError):
    """The task file could not be read, validated or written."""


class RecurringTaskError(TuduError):
    """A recurring task cannot be marked as completed."""


class OutOfBoundsError(TuduError, IndexError):
    """A cursor was asked to select outside its bound."""

    def __init__(self, index: int, upper_bound: int) -> None:
        super().__init__(f"index {index} out of bounds (upper bound {upper_bound})")
        self.index = index
        self.upper_bound = upper_bound


class BusClosedError(TuduError):
    """An intent was sent after the consumer went away."""
