"""routeurl exception hierarchy.

Shared across the route table, the classifier, and both generators so
every module raises and catches the same types.

Generation errors never reach callers of the public ``generate()``
methods. They are raised internally and turned into a ``None`` result at
the generator boundary.
"""


class RouteUrlError(Exception):
    """Base for all routeurl-specific errors."""


class ConfigurationError(RouteUrlError):
    """Raised when routes or generation options are invalid.

    Typically raised while registering routes, or on the first absolute
    generation call when no base URI can be determined.
    """


class GenerationError(RouteUrlError):
    """No URL could be produced for a route."""

    def __init__(self, route_name: str, detail: str = "") -> None:
        self.route_name = route_name
        self.detail = detail
        super().__init__(route_name, detail)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.route_name}: {self.detail}"
        return self.route_name


class RouteNotFound(GenerationError):  # noqa: N818
    """The route name has no entry in the table."""

    def __init__(self, route_name: str) -> None:
        super().__init__(route_name, f"No route named {route_name!r}")


class MissingRequiredValue(GenerationError):
    """A required path segment has no matching non-null property."""

    def __init__(self, route_name: str, segment: str) -> None:
        self.segment = segment
        super().__init__(route_name, f"Missing value for required segment {segment!r}")


class ConstraintViolation(GenerationError):
    """A segment value was rejected by the segment's constraint."""

    def __init__(self, route_name: str, segment: str, value: str) -> None:
        self.segment = segment
        self.value = value
        super().__init__(
            route_name,
            f"Value {value!r} does not satisfy the constraint on {segment!r}",
        )
