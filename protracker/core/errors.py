from __future__ import annotations


class InvalidParameterError(ValueError):
    """A caller-supplied parameter failed validation."""

    def __init__(self, name: str, value: object, expected: str) -> None:
        self.name = name
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid {name}: {value!r}. Expected {expected}.")
