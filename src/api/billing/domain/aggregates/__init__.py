"""Aggregates for the billing bounded context."""

from billing.domain.aggregates.client import CLIENT_TRANSITIONS, Client
from billing.domain.aggregates.invoice import INVOICE_TRANSITIONS, Invoice

__all__ = [
    "CLIENT_TRANSITIONS",
    "Client",
    "INVOICE_TRANSITIONS",
    "Invoice",
]
