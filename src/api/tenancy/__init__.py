"""Tenancy bounded context.

Resolves the tenant behind an inbound host, and binds that tenant's
dedicated database as the storage context for the rest of the request.
"""
