"""PrivX role-store API client.

Besides thin endpoint wrappers, this module implements role membership
reconciliation: ``add_user_role`` and ``remove_user_role`` read the user's
current roles, decide whether anything must change and write the new list
back at most once.

The role-store API offers no version token for the roles list, so the
read-then-write pair is not atomic. Two concurrent reconciliations for the
same user may both read the same list and the last write wins, dropping the
other change.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List
from urllib.parse import quote

from privx_sdk.restapi.client import RestConnector

from .models import Role, RoleRef, Source, User

API_PREFIX = "/role-store/api/v1"

logger = logging.getLogger(__name__)


def _escape(value: str) -> str:
    """Percent-escape a path segment, including '/'."""
    return quote(value, safe="")


def _items(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    return (payload or {}).get("items") or []


class RoleStore:
    """Client for the role-store API."""

    def __init__(self, connector: RestConnector):
        """Initialize role-store client.

        Args:
            connector: Authenticated REST connector
        """
        self.connector = connector

    # ─────────────────────────────────────────────────────────────────────
    # Sources
    # ─────────────────────────────────────────────────────────────────────
    def sources(self) -> List[Source]:
        """Return all configured user sources."""
        resp = self.connector.get(f"{API_PREFIX}/sources")
        return [Source.from_dict(item) for item in _items(resp.json())]

    def source(self, source_id: str) -> Source:
        resp = self.connector.get(f"{API_PREFIX}/sources/{_escape(source_id)}")
        return Source.from_dict(resp.json())

    def create_source(self, source: Source) -> str:
        """Create a source and return its ID."""
        resp = self.connector.post(f"{API_PREFIX}/sources", json=source.to_dict())
        return resp.json().get("id", "")

    def delete_source(self, source_id: str) -> None:
        self.connector.delete(f"{API_PREFIX}/sources/{_escape(source_id)}")

    # ─────────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────────
    def search_users(self, keywords: str, source: str) -> List[User]:
        """Search users matching the keywords within a source."""
        resp = self.connector.post(
            f"{API_PREFIX}/users/search",
            json={"keywords": keywords, "source": source},
        )
        return [User.from_dict(item) for item in _items(resp.json())]

    def user(self, user_id: str) -> User:
        resp = self.connector.get(f"{API_PREFIX}/users/{_escape(user_id)}")
        return User.from_dict(resp.json())

    def user_roles(self, user_id: str) -> List[Role]:
        """Return the roles currently granted to a user."""
        resp = self.connector.get(f"{API_PREFIX}/users/{_escape(user_id)}/roles")
        return [Role.from_dict(item) for item in _items(resp.json())]

    def add_user_role(self, user_id: str, role_id: str) -> None:
        """Grant a role to a user explicitly.

        Does nothing if the user already holds the role (explicitly or
        not). Otherwise the role is looked up to confirm it exists and the
        extended role list is written back in a single call.

        Args:
            user_id: User ID
            role_id: Role ID

        Raises:
            PrivXError: If any remote call fails; no write happens when a
                read fails
        """
        roles = self.user_roles(user_id)
        if any(role.id == role_id for role in roles):
            logger.debug(f"[role-grant] User '{user_id}' already has role '{role_id}'")
            return

        role = self.role(role_id)
        roles.append(Role(id=role.id or role_id, explicit=True))

        self._set_user_roles(user_id, roles)
        logger.info(f"[role-grant] Granted role '{role_id}' to user '{user_id}'")

    def remove_user_role(self, user_id: str, role_id: str) -> None:
        """Remove a role from a user.

        Every grant with the given ID is removed, regardless of how it was
        granted. Does nothing if the user does not hold the role.

        Args:
            user_id: User ID
            role_id: Role ID

        Raises:
            PrivXError: If any remote call fails
        """
        roles = self.user_roles(user_id)
        remaining = [role for role in roles if role.id != role_id]
        if len(remaining) == len(roles):
            logger.debug(f"[role-revoke] User '{user_id}' does not have role '{role_id}'")
            return

        self._set_user_roles(user_id, remaining)
        logger.info(f"[role-revoke] Removed role '{role_id}' from user '{user_id}'")

    def _set_user_roles(self, user_id: str, roles: List[Role]) -> None:
        self.connector.put(
            f"{API_PREFIX}/users/{_escape(user_id)}/roles",
            json=[role.to_dict() for role in roles],
        )

    # ─────────────────────────────────────────────────────────────────────
    # Roles
    # ─────────────────────────────────────────────────────────────────────
    def roles(self) -> List[Role]:
        """Return all configured roles."""
        resp = self.connector.get(f"{API_PREFIX}/roles")
        return [Role.from_dict(item) for item in _items(resp.json())]

    def role(self, role_id: str) -> Role:
        resp = self.connector.get(f"{API_PREFIX}/roles/{_escape(role_id)}")
        return Role.from_dict(resp.json())

    def get_role_members(self, role_id: str) -> List[User]:
        """Return users holding the role."""
        resp = self.connector.get(f"{API_PREFIX}/roles/{_escape(role_id)}/members")
        return [User.from_dict(item) for item in _items(resp.json())]

    def create_role(self, role: Role) -> str:
        """Create a role and return its ID."""
        resp = self.connector.post(f"{API_PREFIX}/roles", json=role.to_dict())
        return resp.json().get("id", "")

    def resolve_roles(self, names: List[str]) -> List[RoleRef]:
        """Resolve role names to references.

        Result order follows the directory, not ``names``; match by name
        when order matters. An empty list is answered locally.
        """
        if not names:
            return []
        resp = self.connector.post(f"{API_PREFIX}/roles/resolve", json=list(names))
        return [RoleRef.from_dict(item) for item in _items(resp.json())]
