"""Port-level exceptions for the tenancy bounded context.

These exceptions represent infrastructure failures surfaced through the
tenant lookup port. An unknown host is not an exception: it resolves to
``HostNotFound``.
"""


class LookupFailedError(Exception):
    """Raised when the tenant store could not answer a lookup.

    Covers connectivity errors, timeouts and data-integrity violations.
    Callers must map this to a server-side error and never treat it as an
    unknown host.

    Attributes:
        host: The normalized host being looked up, if known
    """

    def __init__(self, message: str, host: str | None = None):
        super().__init__(message)
        self.host = host


class DuplicateTenantDomainError(LookupFailedError):
    """Raised when more than one tenant is stored under the same domain.

    The store-level uniqueness rule for tenant domains has been violated.
    Resolution refuses to pick one of the candidates.
    """

    def __init__(self, host: str, count: int):
        super().__init__(
            f"{count} tenants share domain '{host}'",
            host=host,
        )
        self.count = count
