"""Application layer for the billing bounded context."""
