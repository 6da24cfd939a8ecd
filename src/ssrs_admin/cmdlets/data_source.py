"""
Set the stored password of a data source.
"""
import logging
from typing import Any, Dict, Optional

from ssrs_admin.client.connection import ReportingService
from ssrs_admin.cmdlets.common import ConfirmationGate, acquire_proxy
from ssrs_admin.errors import CatalogOperationError, ServiceFault

logger = logging.getLogger(__name__)

SET_PASSWORD_ACTION = "Set data source password"


def set_data_source_password(path: str,
                             password: str,
                             *,
                             proxy: Optional[ReportingService] = None,
                             config: Optional[Dict[str, Any]] = None,
                             gate: Optional[ConfirmationGate] = None) -> bool:
    """
    Overwrites the password stored in the data source at `path`.

    The current content is fetched, its `Password` field replaced, and the
    whole object written back. Returns False if the gate declined.
    """
    gate = gate or ConfirmationGate()
    if not gate.should_process(path, SET_PASSWORD_ACTION):
        return False

    proxy = acquire_proxy(proxy, config)

    try:
        logger.debug(f"Retrieving data source contents of {path}")
        content: Any = proxy.get_data_source_contents(path)
        content.Password = password
        logger.debug(f"Submitting updated data source contents of {path}")
        proxy.set_data_source_contents(path, content)
    except ServiceFault as e:
        raise CatalogOperationError(f"Exception occurred while setting the password of data source '{path}': {e.message}", path) from e

    logger.info(f"Password updated for data source {path}")
    return True
