"""Role-store entities.

Fields the SDK does not model are kept in ``extra`` so that writing an
entity back (e.g. a user's role list) does not drop data the directory
returned.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List


def _split(data: Dict[str, Any], known: tuple[str, ...]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key not in known}


@dataclass
class Role:
    """Role grant. Membership is keyed by ``id`` only."""
    id: str
    name: str = ""
    explicit: bool = False
    implicit: bool = False
    system: bool = False
    comment: str = ""
    permissions: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
    # Known keys present when read, written back even if empty.
    read_keys: frozenset = field(default_factory=frozenset, repr=False, compare=False)

    _FIELDS = ("id", "name", "explicit", "implicit", "system", "comment", "permissions")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Role":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            explicit=bool(data.get("explicit", False)),
            implicit=bool(data.get("implicit", False)),
            system=bool(data.get("system", False)),
            comment=data.get("comment", ""),
            permissions=list(data.get("permissions") or []),
            extra=_split(data, cls._FIELDS),
            read_keys=frozenset(key for key in cls._FIELDS if key in data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting empty optional fields that were not read."""
        payload: Dict[str, Any] = dict(self.extra)
        payload["id"] = self.id
        for key in self._FIELDS[1:]:
            value = getattr(self, key)
            if value or key in self.read_keys:
                payload[key] = value
        return payload


@dataclass
class RoleRef:
    """Lightweight reference returned when resolving role names."""
    id: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoleRef":
        return cls(id=data.get("id", ""), name=data.get("name", ""))


@dataclass
class User:
    id: str
    principal: str = ""
    source: str = ""
    full_name: str = ""
    email: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELDS = ("id", "principal", "source", "full_name", "email")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data.get("id", ""),
            principal=data.get("principal", ""),
            source=data.get("source", ""),
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            extra=_split(data, cls._FIELDS),
        )


@dataclass
class Source:
    """User directory source (e.g. LDAP, local)."""
    id: str = ""
    name: str = ""
    enabled: bool = False
    comment: str = ""
    tags: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELDS = ("id", "name", "enabled", "comment", "tags")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Source":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            enabled=bool(data.get("enabled", False)),
            comment=data.get("comment", ""),
            tags=list(data.get("tags") or []),
            extra=_split(data, cls._FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.extra)
        if self.id:
            payload["id"] = self.id
        payload["name"] = self.name
        payload["enabled"] = self.enabled
        if self.comment:
            payload["comment"] = self.comment
        if self.tags:
            payload["tags"] = list(self.tags)
        return payload
