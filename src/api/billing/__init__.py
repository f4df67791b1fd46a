"""Billing bounded context.

Owns clients and invoices. All billing data lives in the tenant's
dedicated database, so every repository here works on the session of a
bound tenant context.
"""
