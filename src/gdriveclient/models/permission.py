"""Permission model: roles, grantee types and grants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class Role(str, Enum):
    """Drive permission roles, declared in increasing order of privilege."""

    READER = "reader"
    COMMENTER = "commenter"
    WRITER = "writer"
    FILE_ORGANIZER = "fileOrganizer"
    ORGANIZER = "organizer"
    OWNER = "owner"

    @property
    def privilege(self) -> int:
        return _ROLE_ORDER.index(self)

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.privilege < other.privilege

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.privilege <= other.privilege

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.privilege > other.privilege

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.privilege >= other.privilege


_ROLE_ORDER: tuple[Role, ...] = tuple(Role)


class GranteeType(str, Enum):
    """Who a permission is granted to."""

    USER = "user"
    GROUP = "group"
    DOMAIN = "domain"
    ANYONE = "anyone"

    def __str__(self) -> str:
        return self.value


RoleLike = Union[Role, str]


@dataclass(slots=True, frozen=True)
class PermissionGrant:
    """
    A permission to create on one file.

    Grantee fields depend on the grantee type:
        - user/group: email_address required, domain forbidden
        - domain: domain required, email_address forbidden
        - anyone: neither
    """

    grantee_type: GranteeType
    role: Role
    email_address: Optional[str] = None
    domain: Optional[str] = None

    def __post_init__(self) -> None:
        # Coerce plain strings; Enum lookup raises ValueError for unknown values.
        object.__setattr__(self, "grantee_type", GranteeType(self.grantee_type))
        object.__setattr__(self, "role", Role(self.role))

        kind = self.grantee_type
        if kind in (GranteeType.USER, GranteeType.GROUP):
            if not _non_empty(self.email_address):
                raise ValueError(f"{kind.value} grants require an email_address")
            if self.domain is not None:
                raise ValueError(f"{kind.value} grants must not set domain")
        elif kind is GranteeType.DOMAIN:
            if not _non_empty(self.domain):
                raise ValueError("domain grants require a domain")
            if self.email_address is not None:
                raise ValueError("domain grants must not set email_address")
        elif self.email_address is not None or self.domain is not None:
            raise ValueError("anyone grants must not set email_address or domain")

    @classmethod
    def for_user(cls, role: RoleLike, email_address: str) -> "PermissionGrant":
        return cls(GranteeType.USER, Role(role), email_address=email_address)

    @classmethod
    def for_group(cls, role: RoleLike, email_address: str) -> "PermissionGrant":
        return cls(GranteeType.GROUP, Role(role), email_address=email_address)

    @classmethod
    def for_domain(cls, role: RoleLike, domain: str) -> "PermissionGrant":
        return cls(GranteeType.DOMAIN, Role(role), domain=domain)

    @classmethod
    def for_anyone(cls, role: RoleLike) -> "PermissionGrant":
        return cls(GranteeType.ANYONE, Role(role))

    @property
    def grantee(self) -> Optional[str]:
        """The grantee identifier: an email address, a domain, or None for anyone."""
        return self.email_address if self.email_address is not None else self.domain

    def to_api(self) -> dict[str, str]:
        """Return the Drive v3 `permissions` request body."""
        body = {"type": self.grantee_type.value, "role": self.role.value}
        if self.email_address is not None:
            body["emailAddress"] = self.email_address
        if self.domain is not None:
            body["domain"] = self.domain
        return body


@dataclass(slots=True, frozen=True)
class Permission:
    """A permission as returned by Drive after creation."""

    permission_id: str
    grantee_type: str
    role: str
    email_address: Optional[str] = None
    domain: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Permission":
        def _str(key: str) -> Optional[str]:
            value = data.get(key)
            return value if isinstance(value, str) else None

        return cls(
            permission_id=_str("id") or "",
            grantee_type=_str("type") or "",
            role=_str("role") or "",
            email_address=_str("emailAddress"),
            domain=_str("domain"),
        )


def _non_empty(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(value.strip())
