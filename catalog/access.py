"""Row-level access policies for the storefront tables.

Mirrors the policies declared in ``db/schema.sql`` so the SQLite store
enforces the same rules: anyone may read, only authenticated principals
whose token claims the ``admin`` role may write.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

__all__ = [
    "AccessDenied",
    "Principal",
    "ANONYMOUS",
    "SERVICE_ADMIN",
    "TABLE_POLICIES",
    "is_allowed",
    "check_access",
]

READ = "select"
INSERT = "insert"
UPDATE = "update"
DELETE = "delete"

_WRITES: FrozenSet[str] = frozenset({INSERT, UPDATE, DELETE})

# Operations that have an admin policy, per table. collection_products
# rows are only ever added or removed, never updated.
TABLE_POLICIES: Dict[str, FrozenSet[str]] = {
    "products": _WRITES,
    "categories": _WRITES,
    "collections": _WRITES,
    "collection_products": frozenset({INSERT, DELETE}),
}


class AccessDenied(PermissionError):
    """Raised when a principal attempts an operation no policy grants."""


@dataclass(frozen=True)
class Principal:
    """Who is acting: anonymous, or an authenticated subject with JWT claims."""

    user_id: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.claims.get("role") == "admin"

    @classmethod
    def from_claims(cls, claims: Optional[Dict[str, Any]]) -> "Principal":
        """Build a principal from decoded token claims (``sub`` is the user id)."""
        if not claims or not claims.get("sub"):
            return ANONYMOUS
        return cls(user_id=str(claims["sub"]), claims=dict(claims))


ANONYMOUS = Principal()

# Used by the sync command, which writes on behalf of the store itself.
SERVICE_ADMIN = Principal(user_id="catalog-sync", claims={"role": "admin"})


def is_allowed(principal: Principal, table: str, operation: str) -> bool:
    if table not in TABLE_POLICIES:
        return False
    if operation == READ:
        return True
    return operation in TABLE_POLICIES[table] and principal.is_admin


def check_access(principal: Principal, table: str, operation: str) -> None:
    """Raise AccessDenied unless ``principal`` may perform ``operation`` on ``table``."""
    if not is_allowed(principal, table, operation):
        who = principal.user_id or "anonymous"
        raise AccessDenied(f"{who} may not {operation} on {table}")
