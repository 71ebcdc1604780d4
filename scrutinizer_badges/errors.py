"""
Badge error types.

Each error carries a short ``pretty_message`` suitable for display in place of
the badge message.
"""

from typing import Iterable


class BadgeError(Exception):
    """Base class for errors that end a badge request."""

    default_message = "error"

    def __init__(self, pretty_message: str | None = None):
        self.pretty_message = pretty_message or self.default_message
        super().__init__(self.pretty_message)


class NotFound(BadgeError):
    """The requested project, branch, or metric does not exist."""

    default_message = "not found"


class InvalidResponse(BadgeError):
    """The upstream response did not have the expected shape."""

    default_message = "invalid response data"

    def __init__(
        self,
        pretty_message: str | None = None,
        errors: Iterable[str] | None = None,
    ):
        super().__init__(pretty_message)
        self.errors = list(errors or [])

    def __str__(self) -> str:
        if not self.errors:
            return self.pretty_message
        return f"{self.pretty_message}: {'; '.join(self.errors)}"


class Inaccessible(BadgeError):
    """The upstream service refused access to the project."""

    default_message = "inaccessible"
