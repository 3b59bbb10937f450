class SubwayError(ValueError):
    """Base class for domain failures raised by the subway services."""


class DuplicateName(SubwayError):
    pass


class StationNotFound(SubwayError):
    pass


class LineNotFound(SubwayError):
    pass


class InvalidSection(SubwayError):
    """A line whose end stations coincide or whose distance is not positive."""
