"""Exceptions raised during dependency resolution."""


class DependencyError(Exception):
    """Base class for dependency resolution errors."""

    pass


class InvalidArgumentError(DependencyError, ValueError):
    """Raised when resolve_dependencies is called with malformed input."""

    pass


class AdapterError(DependencyError):
    """Raised when the name resolver fails internally.

    Unlike an unresolved name, which is silently skipped, this aborts the
    whole resolution and no partial result is returned.
    """

    pass


class MarkerEvaluationError(AdapterError):
    """Raised when a marker function cannot be evaluated to strings."""

    pass


class ResolutionDepthError(AdapterError):
    """Raised when nested function walks exceed the depth ceiling."""

    def __init__(self, message: str, chain: list[str] | None = None):
        super().__init__(message)
        self.chain = chain or []
