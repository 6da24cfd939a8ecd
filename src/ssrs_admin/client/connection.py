"""
SOAP Connection to the Report Server Web Service.

This module provides:
- The `ReportingService` protocol: the five remote operations the commands use.
- `SoapReportingService`, a wrapper around a `zeep` client for ReportService2010.asmx
  that converts SOAP faults and transport errors into `ServiceFault`.
- `connect()`, which acquires a reusable connection handle from configuration.
- `LazyReportingService`, which postpones `connect()` until a remote call is made.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

import requests
from requests.auth import HTTPBasicAuth
from requests_ntlm import HttpNtlmAuth
from zeep import Client
from zeep.exceptions import Error as ZeepError, Fault
from zeep.transports import Transport

from ssrs_admin.config_loader import ServerSettings, resolve_server_settings
from ssrs_admin.errors import ServiceFault
from ssrs_admin.models import Policy

logger = logging.getLogger(__name__)


class ReportingService(Protocol):
    """The remote capabilities the commands need. Tests substitute a fake."""

    def get_data_source_contents(self, path: str) -> Any: ...

    def set_data_source_contents(self, path: str, content: Any) -> None: ...

    def delete_item(self, path: str) -> None: ...

    def get_policies(self, path: str) -> Tuple[List[Policy], bool]: ...

    def set_policies(self, path: str, policies: List[Policy]) -> None: ...


class SoapReportingService:
    client: Client
    uri: Optional[str]

    """
    ReportService2010 proxy backed by a zeep client.
    """
    def __init__(self, client: Client, uri: Optional[str] = None):
        self.client = client
        self.uri = uri

    def _call(self, operation: str, **kwargs: Any) -> Any:
        """
        Invokes one SOAP operation. Faults and transport failures are
        re-raised as ServiceFault with the remote message.
        """
        logger.debug(f"Calling {operation} with {', '.join(f'{k}={v!r}' for k, v in kwargs.items() if k != 'Definition')}")
        try:
            result = getattr(self.client.service, operation)(**kwargs)
        except Fault as e:
            raise ServiceFault(operation, e.message or str(e)) from e
        except ZeepError as e:
            raise ServiceFault(operation, str(e)) from e
        except requests.RequestException as e:
            raise ServiceFault(operation, str(e)) from e
        logger.debug(f"{operation} completed.")
        return result

    def get_data_source_contents(self, path: str) -> Any:
        return self._call("GetDataSourceContents", DataSource=path)

    def set_data_source_contents(self, path: str, content: Any) -> None:
        self._call("SetDataSourceContents", DataSource=path, Definition=content)

    def delete_item(self, path: str) -> None:
        self._call("DeleteItem", ItemPath=path)

    def get_policies(self, path: str) -> Tuple[List[Policy], bool]:
        response = self._call("GetPolicies", ItemPath=path)
        # GetPolicies has two out parameters; zeep returns them as attributes
        policies_obj = getattr(response, "Policies", None)
        raw_policies = getattr(policies_obj, "Policy", policies_obj) or []
        inherit_parent = bool(getattr(response, "InheritParent", False))
        return [Policy.from_soap(p) for p in raw_policies], inherit_parent

    def set_policies(self, path: str, policies: List[Policy]) -> None:
        self._call("SetPolicies", ItemPath=path, Policies={"Policy": [p.to_soap() for p in policies]})


class LazyReportingService:
    _factory: Callable[[], ReportingService]
    _service: Optional[ReportingService]

    """
    Defers opening the connection until the first remote call, then reuses it.
    A command the confirmation gate declines never touches the server.
    """
    def __init__(self, factory: Callable[[], ReportingService]):
        self._factory = factory
        self._service = None

    @property
    def connected(self) -> bool:
        return self._service is not None

    def _resolve(self) -> ReportingService:
        if self._service is None:
            logger.debug("First remote call; opening the report server connection.")
            self._service = self._factory()
        return self._service

    def get_data_source_contents(self, path: str) -> Any:
        return self._resolve().get_data_source_contents(path)

    def set_data_source_contents(self, path: str, content: Any) -> None:
        self._resolve().set_data_source_contents(path, content)

    def delete_item(self, path: str) -> None:
        self._resolve().delete_item(path)

    def get_policies(self, path: str) -> Tuple[List[Policy], bool]:
        return self._resolve().get_policies(path)

    def set_policies(self, path: str, policies: List[Policy]) -> None:
        self._resolve().set_policies(path, policies)


def _build_session(settings: ServerSettings) -> requests.Session:
    session = requests.Session()
    session.verify = settings.verify_ssl

    if settings.auth == "ntlm" and settings.username:
        session.auth = HttpNtlmAuth(settings.username, settings.password or "")
    elif settings.auth == "basic" and settings.username:
        session.auth = HTTPBasicAuth(settings.username, settings.password or "")
    elif settings.auth != "none":
        logger.warning(f"No username configured for '{settings.auth}' authentication; connecting without credentials.")
    return session


def connect(config: Optional[Dict[str, Any]] = None, **overrides: Any) -> SoapReportingService:
    """
    Opens a proxy to the report server described by `config`.

    Errors while loading the WSDL (unreachable server, rejected
    credentials, bad URI) are not wrapped.
    """
    settings = resolve_server_settings(config or {}, **overrides)
    logger.info(f"Connecting to report server at {settings.uri}...")

    transport = Transport(session=_build_session(settings), timeout=settings.timeout)
    client = Client(settings.wsdl_url, transport=transport)

    logger.info(f"Connected to {settings.wsdl_url}")
    return SoapReportingService(client, uri=settings.uri)
