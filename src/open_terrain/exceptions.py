"""Custom exception hierarchy for the application."""


class AppError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class InvalidInputError(AppError):
    """Raised when query coordinates or parameters are malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_INPUT")


class NoGroundDataError(AppError):
    """Raised when there are no ground points to interpolate from."""

    def __init__(self) -> None:
        super().__init__(
            "No ground points available, cannot interpolate",
            code="NO_GROUND_DATA",
        )


class UnknownMethodError(AppError):
    """Raised when the requested interpolation method does not exist."""

    def __init__(self, method: str) -> None:
        super().__init__(
            f"Unknown interpolation method: '{method}'",
            code="UNKNOWN_METHOD",
        )
        self.method = method


class DeprecatedMethodError(AppError):
    """Raised when a method name has been renamed."""

    def __init__(self, method: str, replacement: str, *, since: str) -> None:
        super().__init__(
            f"Method '{method}' is called '{replacement}' since version {since}",
            code="DEPRECATED_METHOD",
        )
        self.method = method
        self.replacement = replacement


class MissingDependencyError(AppError):
    """Raised when an optional interpolation backend is not installed."""

    def __init__(self, dependency: str) -> None:
        super().__init__(
            f"'{dependency}' package is needed for this method to work. Please install it.",
            code="MISSING_DEPENDENCY",
        )
        self.dependency = dependency


class InterpolationError(AppError):
    """Raised when a backend cannot solve for an elevation."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INTERPOLATION_FAILED")
