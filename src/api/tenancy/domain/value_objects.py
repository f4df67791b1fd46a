"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ulid import ULID

_LABEL_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
_DATABASE_RE = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Accepts case-insensitive input (per Crockford's Base32 spec) and
        stores the canonical uppercase form.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            parsed = ULID.from_str(value.upper())
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        return cls(value=str(parsed))


@dataclass(frozen=True)
class Subdomain:
    """The host label that identifies a tenant, e.g. "acme" in acme.larasuite.app.

    Always a single lowercase DNS label.
    """

    value: str

    def __post_init__(self) -> None:
        if not _LABEL_RE.match(self.value):
            raise ValueError(f"Invalid subdomain: {self.value!r}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Subdomain:
        """Create a Subdomain from user input, normalizing case and whitespace."""
        return cls(value=value.strip().lower())

    @classmethod
    def from_host(cls, host: str, base_domain: str | None = None) -> Subdomain:
        """Extract the tenant subdomain from a request host.

        Rules:
        - port, surrounding whitespace and a trailing dot are ignored
        - a bare label (no dot) is taken as the subdomain itself
        - with base_domain, the host must be exactly ``<label>.<base_domain>``
        - without base_domain, the host needs three or more labels and the
          first one is the subdomain

        Args:
            host: Host header value or bare subdomain
            base_domain: Domain tenants are served under, if configured

        Returns:
            The parsed Subdomain

        Raises:
            ValueError: If the host has no subdomain component
        """
        normalized = host.strip().lower()
        if normalized.startswith("["):
            # IPv6 literal: no subdomain to speak of
            raise ValueError(f"Host has no subdomain: {host!r}")
        normalized = normalized.split(":", 1)[0].rstrip(".")
        if not normalized:
            raise ValueError("Host is empty")

        if "." not in normalized:
            return cls(value=normalized)

        if base_domain:
            suffix = "." + base_domain.strip(".").lower()
            if not normalized.endswith(suffix):
                raise ValueError(f"Host {host!r} is not under {base_domain!r}")
            label = normalized[: -len(suffix)]
            if not label or "." in label:
                raise ValueError(f"Host has no single-label subdomain: {host!r}")
            return cls(value=label)

        labels = normalized.split(".")
        if len(labels) < 3 or all(part.isdigit() for part in labels):
            raise ValueError(f"Host has no subdomain: {host!r}")
        return cls(value=labels[0])


def validate_database_name(name: str) -> str:
    """Check that a tenant database name is a safe PostgreSQL identifier.

    Raises:
        ValueError: If the name is not a lowercase identifier of at most 63 chars
    """
    if not _DATABASE_RE.match(name):
        raise ValueError(f"Invalid tenant database name: {name!r}")
    return name


def default_database_name(subdomain: Subdomain) -> str:
    """Derive the database name used when provisioning without an explicit one."""
    return "tenant_" + subdomain.value.replace("-", "_")
