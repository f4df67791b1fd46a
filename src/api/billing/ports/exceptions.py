"""Port-level exceptions for the billing bounded context."""

from __future__ import annotations

from shared_kernel.exceptions import DomainError


class DuplicateTaxIdError(DomainError):
    """Raised when saving a client whose tax ID belongs to another client."""

    code = "duplicate_tax_id"
