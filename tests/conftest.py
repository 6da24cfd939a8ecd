"""
Pytest Configuration and Fixtures for the ssrs_admin project.

This module provides an in-memory stand-in for the report server web
service so the commands can be tested without an SSRS instance.
"""

import sys
from types import SimpleNamespace
import pytest
import logging

from ssrs_admin.errors import ServiceFault
from ssrs_admin.models import Policy, Role


class FakeReportingService:
    """
    Implements the ReportingService protocol over plain dicts.
    Every call is recorded in `calls` as (operation, path).
    Operations listed in `failures` raise ServiceFault with the given message.
    """
    def __init__(self):
        self.items = set()
        self.data_sources = {}
        self.policies = {}
        self.calls = []
        self.failures = {}

    def _record(self, operation, path):
        self.calls.append((operation, path))
        if operation in self.failures:
            raise ServiceFault(operation, self.failures[operation])

    def _require(self, operation, path):
        if path not in self.items:
            raise ServiceFault(operation, f"The item '{path}' cannot be found. (rsItemNotFound)")

    def get_data_source_contents(self, path):
        self._record("GetDataSourceContents", path)
        self._require("GetDataSourceContents", path)
        # hand back a copy, as the real service does
        return SimpleNamespace(**vars(self.data_sources[path]))

    def set_data_source_contents(self, path, content):
        self._record("SetDataSourceContents", path)
        self._require("SetDataSourceContents", path)
        self.data_sources[path] = content

    def delete_item(self, path):
        self._record("DeleteItem", path)
        self._require("DeleteItem", path)
        self.items.discard(path)
        self.data_sources.pop(path, None)
        self.policies.pop(path, None)

    def get_policies(self, path):
        self._record("GetPolicies", path)
        self._require("GetPolicies", path)
        policies, inherit_parent = self.policies.get(path, ([], True))
        return list(policies), inherit_parent

    def set_policies(self, path, policies):
        self._record("SetPolicies", path)
        self._require("SetPolicies", path)
        self.policies[path] = (list(policies), False)

    @property
    def operations(self):
        return [operation for operation, _ in self.calls]


@pytest.fixture
def fake_service():
    """A fake report server holding one data source, one report and a folder with two policies."""
    service = FakeReportingService()
    service.items.update({"/Data Sources/Sales", "/Reports/Revenue", "/Reports"})
    service.data_sources["/Data Sources/Sales"] = SimpleNamespace(
        ConnectString="Data Source=sql01;Initial Catalog=Sales",
        UserName="CORP\\svc_reports",
        Password=None,
        CredentialRetrieval="Store",
    )
    service.policies["/Reports"] = ([
        Policy(group_user_name="CORP\\alice", roles=[Role(name="Browser")]),
        Policy(group_user_name="CORP\\bob", roles=[Role(name="Publisher"), Role(name="Report Builder")]),
    ], False)
    return service


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """
    Configures the Python logging framework globally for all tests.
    Because tests bypass main.py, this ensures our logs are formatted
    and visible exactly how we want them during test runs.
    """
    formatter = logging.Formatter(fmt="%(levelname)-8s %(message)s - %(funcName)s:%(lineno)d ")
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
