"""
Inspect and revoke access policies on a catalog item.

Policies are read with GetPolicies, filtered locally, and written back in
full with SetPolicies; the report server has no per-identity revoke call.
"""
import logging
from typing import Any, Dict, List, Optional

from ssrs_admin.client.connection import ReportingService
from ssrs_admin.cmdlets.common import ConfirmationGate, acquire_proxy
from ssrs_admin.errors import CatalogOperationError, PolicyNotFoundError, ServiceFault
from ssrs_admin.models import Policy

logger = logging.getLogger(__name__)


def filter_policies(policies: List[Policy], identity: str) -> List[Policy]:
    """Returns `policies` without the entries held by `identity`, order preserved."""
    return [policy for policy in policies if not policy.matches(identity)]


def get_catalog_item_access(path: str,
                            *,
                            identity: Optional[str] = None,
                            proxy: Optional[ReportingService] = None,
                            config: Optional[Dict[str, Any]] = None) -> List[Policy]:
    """Lists the policies on `path`, optionally only those held by `identity`."""
    proxy = acquire_proxy(proxy, config)
    try:
        policies, inherit_parent = proxy.get_policies(path)
    except ServiceFault as e:
        raise CatalogOperationError(f"Exception occurred while retrieving policies for '{path}': {e.message}", path) from e

    logger.debug(f"{path} has {len(policies)} policies (inherited from parent: {inherit_parent})")
    if identity is not None:
        policies = [policy for policy in policies if policy.matches(identity)]
    return policies


def revoke_catalog_item_access(path: str,
                               identity: str,
                               *,
                               strict: bool = False,
                               proxy: Optional[ReportingService] = None,
                               config: Optional[Dict[str, Any]] = None,
                               gate: Optional[ConfirmationGate] = None) -> Optional[List[Policy]]:
    """
    Removes every policy `identity` holds on `path`.

    With `strict`, raises PolicyNotFoundError (and writes nothing) when the
    identity has no policy there. Returns the list that was written back,
    or None if the gate declined.
    """
    gate = gate or ConfirmationGate()
    if not gate.should_process(path, f"Revoke all roles for {identity}"):
        return None

    proxy = acquire_proxy(proxy, config)

    try:
        logger.debug(f"Retrieving policies for {path}")
        policies, inherit_parent = proxy.get_policies(path)
    except ServiceFault as e:
        raise CatalogOperationError(
            f"Exception occurred while retrieving policies for '{path}' to revoke access of '{identity}': {e.message}",
            path) from e

    remaining = filter_policies(policies, identity)
    removed = len(policies) - len(remaining)

    if removed == 0:
        if strict:
            raise PolicyNotFoundError(path, identity)
        logger.info(f"{identity} holds no policy on {path}")

    if inherit_parent and removed == 0:
        logger.warning(f"{path} inherits its policies from its parent; writing back the unchanged list "
                       f"still breaks inheritance although nothing was revoked for {identity}.")
    elif inherit_parent:
        logger.warning(f"{path} inherits its policies from its parent; writing them breaks inheritance.")

    try:
        logger.debug(f"Submitting {len(remaining)} policies for {path}")
        proxy.set_policies(path, remaining)
    except ServiceFault as e:
        raise CatalogOperationError(
            f"Exception occurred while revoking access of '{identity}' on '{path}': {e.message}", path) from e

    logger.info(f"Revoked {removed} policy entries of {identity} on {path}")
    return remaining
