"""
Administrative commands against the report server catalog.

Each command acquires (or reuses) a proxy, asks the confirmation gate,
performs its remote call sequence, and wraps remote faults in
`CatalogOperationError`.
"""
from ssrs_admin.cmdlets.access import get_catalog_item_access, revoke_catalog_item_access
from ssrs_admin.cmdlets.catalog_item import remove_catalog_item
from ssrs_admin.cmdlets.common import ConfirmationGate
from ssrs_admin.cmdlets.data_source import set_data_source_password

__all__ = [
    "ConfirmationGate",
    "get_catalog_item_access",
    "remove_catalog_item",
    "revoke_catalog_item_access",
    "set_data_source_password",
]
