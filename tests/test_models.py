"""
Tests for the Policy/Role models and their SOAP shapes.
"""

from types import SimpleNamespace

from ssrs_admin.models import Policy, Role


def test_matches_is_case_insensitive():
    policy = Policy(group_user_name="CORP\\Report Readers")

    assert policy.matches("corp\\report readers")
    assert not policy.matches("CORP\\Report Writers")


def test_role_names():
    policy = Policy(group_user_name="alice", roles=[Role(name="Browser"), Role(name="Publisher")])

    assert policy.role_names == ["Browser", "Publisher"]


def test_from_soap_accepts_plain_role_list():
    obj = SimpleNamespace(GroupUserName="bob", Roles=[SimpleNamespace(Name="Writer", Description=None)])

    assert Policy.from_soap(obj) == Policy(group_user_name="bob", roles=[Role(name="Writer")])


def test_from_soap_without_roles():
    assert Policy.from_soap(SimpleNamespace(GroupUserName="bob", Roles=None)).roles == []
