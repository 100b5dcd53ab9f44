"""Typed failures raised by the pure domain rules."""


class DomainError(Exception):
    """Base class for rule violations."""

    code = "domain_error"


class InvalidDifficulty(DomainError):
    """Difficulty outside 1-5."""

    code = "invalid_difficulty"

    def __init__(self, difficulty: object):
        self.difficulty = difficulty
        super().__init__(f"Difficulty must be between 1 and 5 (got {difficulty!r})")
