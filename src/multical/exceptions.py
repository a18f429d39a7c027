class MulticalError(Exception):
    """Base class for every error raised by the conversion engine."""


class InvalidArgumentError(MulticalError, ValueError):
    """A calendar id, locale, zone, civil value or pattern is missing or unresolvable."""


class InvalidFormatError(MulticalError, ValueError):
    """Text does not match any accepted grammar (offsets, times, patterns, profile files)."""
