"""Error types and rejection reasons for the build evaluation engine."""

UNKNOWN_MODIFICATION: str = "unknown modification"
MUTUALLY_EXCLUSIVE_PREFIX: str = "mutually exclusive with"


class InvalidInputError(ValueError):
    """Raised when a vehicle specification cannot be evaluated.

    This is the only fatal condition of a build evaluation: a non-positive
    base horsepower or a missing/unknown enum field.  Everything else
    degrades to a rejection entry on the result.
    """
