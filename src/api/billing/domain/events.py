"""Domain events for the billing bounded context.

Status changes of invoices and clients are recorded as the shared
StatusChanged event. The events below mark the creation of an aggregate,
which has no prior status to transition from.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from shared_kernel.lifecycle import StatusChanged


@dataclass(frozen=True)
class InvoiceDrafted:
    """Event raised when a new invoice is drafted.

    Attributes:
        invoice_id: The ULID of the invoice
        client_id: The ULID of the client being invoiced
        number: Human-facing invoice number
        total: Invoice total as a decimal string
        currency: ISO 4217 currency code
        occurred_at: When the event occurred (UTC)
    """

    invoice_id: str
    client_id: str
    number: str
    total: str
    currency: str
    occurred_at: datetime


@dataclass(frozen=True)
class ClientRegistered:
    """Event raised when a client is registered."""

    client_id: str
    name: str
    tax_id: str
    email: str | None
    occurred_at: datetime


DomainEvent = InvoiceDrafted | ClientRegistered | StatusChanged
