"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID

MAX_HOSTNAME_LENGTH = 253
MAX_LABEL_LENGTH = 63

_LABEL_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")


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

        Args:
            value: ULID string

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class Hostname:
    """A normalized host name used as the tenant-selection key.

    Stored tenant domains, the configured admin domain and inbound request
    hosts all go through ``Hostname.parse`` so that comparisons are exact
    string equality on the normalized form.

    Normalization:
    - surrounding whitespace is trimmed
    - the port is stripped (``host:8080``, ``[::1]:8080``)
    - a single trailing dot is removed
    - labels are lowercased and IDNA-encoded to their ASCII form
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def parse(cls, raw: str) -> Hostname:
        """Normalize a raw host string.

        Args:
            raw: Host as received, e.g. the ``Host`` header value

        Returns:
            Hostname with the normalized value

        Raises:
            ValueError: If the host is empty or not a valid DNS name / IP literal
        """
        host = _strip_port(raw.strip())
        if host.endswith("."):
            host = host[:-1]
        if not host:
            raise ValueError(f"Invalid hostname: {raw!r}")

        ip_literal = _as_ip_literal(host)
        if ip_literal is not None:
            return cls(value=ip_literal)

        try:
            ascii_host = host.lower().encode("idna").decode("ascii")
        except UnicodeError as e:
            raise ValueError(f"Invalid hostname: {raw!r}") from e

        if len(ascii_host) > MAX_HOSTNAME_LENGTH:
            raise ValueError(f"Hostname exceeds {MAX_HOSTNAME_LENGTH} characters")

        for label in ascii_host.split("."):
            if len(label) > MAX_LABEL_LENGTH or not _LABEL_PATTERN.match(label):
                raise ValueError(f"Invalid hostname label {label!r} in {raw!r}")

        return cls(value=ascii_host)


def _strip_port(host: str) -> str:
    """Remove a trailing ``:port`` while leaving bare IPv6 literals intact.

    Input with anything other than a numeric port after the host is returned
    unchanged so that validation rejects it.
    """
    if host.startswith("["):
        closing = host.find("]")
        if closing == -1:
            return host
        rest = host[closing + 1 :]
        if rest == "" or (rest.startswith(":") and _is_port(rest[1:])):
            return host[: closing + 1]
        return host
    if host.count(":") == 1:
        name, _, port = host.partition(":")
        if _is_port(port):
            return name
    return host


def _is_port(port: str) -> bool:
    return port == "" or (port.isascii() and port.isdigit())


def _as_ip_literal(host: str) -> str | None:
    """Return the canonical form of an IP literal, or None for DNS names."""
    candidate = host[1:-1] if host.startswith("[") and host.endswith("]") else host
    try:
        address = ipaddress.ip_address(candidate)
    except ValueError:
        return None
    if address.version == 6:
        return f"[{address.compressed}]"
    return address.compressed


class ResolutionKind(StrEnum):
    """Outcome categories of host resolution."""

    TENANT = "tenant"
    ADMIN = "admin"
    NOT_FOUND = "not_found"
