"""Exception types raised by aiodate."""


class AioDateError(Exception):
    """Base class for all aiodate errors."""


class InvalidDateError(AioDateError, TypeError):
    """An argument expected to be a datetime was something else."""

    def __init__(self, position: int):
        self.position: int = position
        super().__init__(f"Invalid date! You must pass a date on {position} position.")


class DateFormatError(AioDateError, ValueError):
    """A result could not be rendered in the configured output format."""

    def __init__(self, message: str = "Error generating result"):
        super().__init__(message)
