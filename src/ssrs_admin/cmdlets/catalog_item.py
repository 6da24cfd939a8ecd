"""
Delete catalog items (reports, data sources, folders, ...).
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from ssrs_admin.client.connection import ReportingService
from ssrs_admin.cmdlets.common import ConfirmationGate, acquire_proxy
from ssrs_admin.errors import CatalogOperationError, ServiceFault

logger = logging.getLogger(__name__)


def remove_catalog_item(paths: Union[str, Iterable[str]],
                        *,
                        proxy: Optional[ReportingService] = None,
                        config: Optional[Dict[str, Any]] = None,
                        gate: Optional[ConfirmationGate] = None) -> List[str]:
    """
    Deletes each item in `paths` with one DeleteItem call per path.

    Stops at the first failure; items already deleted stay deleted.
    Returns the paths that were actually deleted.
    """
    if isinstance(paths, str):
        paths = [paths]
    gate = gate or ConfirmationGate()
    deleted: List[str] = []

    for path in paths:
        if not gate.should_process(path, "Delete catalog item"):
            continue

        # Connect lazily so a fully declined run never reaches the server
        proxy = acquire_proxy(proxy, config)
        try:
            logger.debug(f"Deleting catalog item {path}")
            proxy.delete_item(path)
        except ServiceFault as e:
            raise CatalogOperationError(f"Exception occurred while deleting catalog item '{path}': {e.message}", path) from e

        logger.info(f"Deleted catalog item {path}")
        deleted.append(path)

    return deleted
