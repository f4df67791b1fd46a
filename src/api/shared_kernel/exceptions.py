"""Base exception shared by every bounded context.

Each domain error carries a stable, machine-readable ``code`` so that the
presentation layer can map failures to responses without string matching.
"""


class DomainError(Exception):
    """Base class for expected, recoverable business errors."""

    code: str = "domain_error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code
