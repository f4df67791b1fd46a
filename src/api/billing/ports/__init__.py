"""Ports for the billing bounded context."""
