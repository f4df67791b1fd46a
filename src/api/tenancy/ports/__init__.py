"""Ports (protocols) for the tenancy bounded context."""
