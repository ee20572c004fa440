"""PrivX role-store client and entities."""
from .client import RoleStore, API_PREFIX
from .models import Role, RoleRef, Source, User

__all__ = ["RoleStore", "API_PREFIX", "Role", "RoleRef", "Source", "User"]
