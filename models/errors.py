"""Exceptions raised by the vehicle setters."""


class InvalidInputError(ValueError):
    """A driver input outside its documented range."""

    def __init__(self, field: str, value: object, expected: str = "a value in [0, 1]"):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be {expected}, got {value!r}")


def check_fraction(field: str, value: float) -> float:
    """Return `value` as float if it lies in [0, 1], else raise InvalidInputError."""
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(field, value) from e
    # NaN fails both comparisons
    if not 0.0 <= value <= 1.0:
        raise InvalidInputError(field, value)
    return value


def check_amount(field: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(field, value, "a non-negative number") from e
    if not value >= 0.0:
        raise InvalidInputError(field, value, "a non-negative number")
    return value
