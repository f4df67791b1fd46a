"""Domain exceptions for the billing bounded context."""

from __future__ import annotations

from shared_kernel.exceptions import DomainError


class PaymentAmountMismatchError(DomainError):
    """Raised when a payment does not settle the outstanding balance exactly."""

    code = "payment_amount_mismatch"

    def __init__(self, invoice_id: str, expected: str, received: str) -> None:
        self.invoice_id = invoice_id
        self.expected = expected
        self.received = received
        super().__init__(
            f"Payment of {received} does not match outstanding balance "
            f"{expected} on invoice {invoice_id}"
        )


class EmptyInvoiceError(DomainError):
    """Raised when issuing an invoice whose total is not positive."""

    code = "empty_invoice"


class ClientHasOutstandingInvoicesError(DomainError):
    """Raised when archiving a client that still has unpaid invoices."""

    code = "client_has_outstanding_invoices"


class InvoiceNotFoundError(DomainError):
    code = "invoice_not_found"


class ClientNotFoundError(DomainError):
    code = "client_not_found"
