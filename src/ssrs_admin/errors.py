"""
Error types raised by the ssrs_admin package.

Connection failures (WSDL load, transport setup) are not part of this
hierarchy; they reach the caller exactly as the transport raised them.
"""


class SsrsAdminError(Exception):
    """Base class for all errors raised by ssrs_admin."""


class ConfigurationError(SsrsAdminError):
    """The report server configuration is incomplete or invalid."""


class ServiceFault(SsrsAdminError):
    """A single call to the reporting web service failed."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.message = message


class CatalogOperationError(SsrsAdminError):
    """
    A command's remote call sequence failed.

    The message names the catalog item (and identity, where relevant)
    together with the original remote message. The fault is kept as __cause__.
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class PolicyNotFoundError(SsrsAdminError):
    """Strict revoke: the identity holds no policy on the item."""

    def __init__(self, path: str, identity: str):
        super().__init__(f"Identity '{identity}' has no access policy on '{path}'; nothing to revoke.")
        self.path = path
        self.identity = identity
