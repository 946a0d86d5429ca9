"""Exceptions raised by element operators."""


class OperatorError(Exception):
    """Base class for every error raised by this package."""


class InvalidOperatorError(OperatorError, ValueError):
    """An operator was configured with parameters it cannot work with."""


class InvalidPatternError(InvalidOperatorError):
    """A regex operator was given a pattern that does not compile or fit its group."""

    def __init__(self, pattern, message: str):
        self.pattern = pattern
        super().__init__(message)


class MissingAttributeError(OperatorError, LookupError):
    """A regex operator was pointed at an attribute the element does not define."""

    def __init__(self, attribute: str, element: str):
        self.attribute = attribute
        self.element = element
        super().__init__(f"Attribute '{attribute}' does not exist on element {element}")


__all__ = [
    "OperatorError",
    "InvalidOperatorError",
    "InvalidPatternError",
    "MissingAttributeError",
]
