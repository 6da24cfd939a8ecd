"""
Data Models for the report server's access-control types.

These mirror the `Policy` and `Role` types defined by ReportService2010.
Nothing here is persisted locally; policies are read from the server,
filtered, and written back.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True, kw_only=True)
class Role:
    """A named role granted by a policy (e.g. "Browser", "Content Manager")."""
    name: str
    description: str = ""

    def to_soap(self) -> Dict[str, Any]:
        return {"Name": self.name, "Description": self.description}


@dataclass(frozen=True, kw_only=True)
class Policy:
    """An identity (user or group) paired with the roles it holds on a catalog item."""
    group_user_name: str
    roles: List[Role] = field(default_factory=list)

    def matches(self, identity: str) -> bool:
        """Account and group names compare case-insensitively, as on Windows."""
        return self.group_user_name.casefold() == identity.casefold()

    @property
    def role_names(self) -> List[str]:
        return [role.name for role in self.roles]

    def to_soap(self) -> Dict[str, Any]:
        """Returns the dict shape zeep accepts for a `Policy` element."""
        return {
            "GroupUserName": self.group_user_name,
            "Roles": {"Role": [role.to_soap() for role in self.roles]},
        }

    @classmethod
    def from_soap(cls, obj: Any) -> "Policy":
        """Builds a Policy from a zeep `Policy` object."""
        roles_obj = getattr(obj, "Roles", None)
        # zeep wraps ArrayOfRole as an object with a `Role` list
        raw_roles = getattr(roles_obj, "Role", roles_obj) or []
        return cls(
            group_user_name=obj.GroupUserName,
            roles=[Role(name=r.Name, description=getattr(r, "Description", None) or "") for r in raw_roles],
        )
