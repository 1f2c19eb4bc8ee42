from typing import Optional


class RecipeMarkError(Exception):
    """Base class for failures raised by the annotation pipeline."""

    error_code = "RECIPEMARK_ERROR"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidFormat(RecipeMarkError, ValueError):
    error_code = "INVALID_FORMAT"


class DivisionByZero(RecipeMarkError, ZeroDivisionError):
    error_code = "DIVISION_BY_ZERO"


class IncompatibleUnits(RecipeMarkError, ValueError):
    error_code = "INCOMPATIBLE_UNITS"


class UnsupportedPath(RecipeMarkError, ValueError):
    error_code = "UNSUPPORTED_PATH"


class UnknownUnit(RecipeMarkError, LookupError):
    error_code = "UNKNOWN_UNIT"


class InvalidArgument(RecipeMarkError, ValueError):
    error_code = "INVALID_ARGUMENT"


class InvalidIngredientPattern(RecipeMarkError, ValueError):
    """Raised at database load time when a pattern line cannot be compiled."""

    error_code = "INVALID_INGREDIENT_PATTERN"

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid ingredient pattern {pattern!r}: {reason}", detail=reason)
        self.pattern = pattern
