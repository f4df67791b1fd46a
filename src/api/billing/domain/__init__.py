"""Domain layer for the billing bounded context."""
