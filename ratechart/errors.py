class RatechartError(Exception):
    """Base class for failures the caller must surface to the user."""


class CsvReadError(RatechartError):
    """The uploaded bytes could not be read as delimited text."""


class ColumnResolutionError(RatechartError):
    """No date or rate column could be located under any known alias."""
