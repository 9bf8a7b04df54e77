"""Role-based read authorization.

This module implements the single authorizer shared by every file format.
The decision algorithm, evaluated in order:

1. **Malformed input** -- a blank path or blank role is denied (fail
   closed; never raises).
2. **Admin bypass** -- the admin role (case-insensitive) may read any path.
3. **Allow-list** -- any other role may read exactly the allow-listed
   paths, compared case-insensitively.

The allow-list is fixed at construction.  Authorizers are immutable and
safe to share between concurrent reads.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from guarded_reader.core.errors import AccessDenied

if TYPE_CHECKING:
    from guarded_reader.core.config import ReaderConfig
    from guarded_reader.core.interfaces import AccessAuthorizer

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_ROLE = "admin"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class PathAllowListAuthorizer:
    """Allow-list authorizer with an admin bypass role.

    Parameters
    ----------
    allowed_paths:
        Paths readable by non-admin roles.  Blank or whitespace-only
        entries are dropped silently.
    admin_role:
        Role that may read any non-blank path.
    """

    __slots__ = ("_allowed", "_admin_role")

    def __init__(
        self,
        allowed_paths: Iterable[str] | None = None,
        *,
        admin_role: str = DEFAULT_ADMIN_ROLE,
    ) -> None:
        if _is_blank(admin_role):
            raise ValueError("admin_role must not be blank")
        self._admin_role = admin_role.casefold()
        self._allowed: frozenset[str] = frozenset(
            p.casefold() for p in (allowed_paths or ()) if not _is_blank(p)
        )

    @classmethod
    def from_config(cls, config: ReaderConfig) -> PathAllowListAuthorizer:
        """Build an authorizer from ``allowed_paths`` and ``admin_role``."""
        return cls(config.allowed_paths, admin_role=config.admin_role)

    @property
    def allowed_paths(self) -> frozenset[str]:
        """The normalised (case-folded) allow-list."""
        return self._allowed

    @property
    def admin_role(self) -> str:
        return self._admin_role

    def can_read(self, path: str | None, role: str | None) -> bool:
        """Return ``True`` if *role* may read *path*."""
        if _is_blank(role) or _is_blank(path):
            return False
        if role.casefold() == self._admin_role:
            return True
        return path.casefold() in self._allowed

    def __repr__(self) -> str:
        return (
            f"PathAllowListAuthorizer(allowed={len(self._allowed)}, "
            f"admin_role={self._admin_role!r})"
        )


def ensure_authorized(
    authorizer: AccessAuthorizer,
    path: str,
    role: str,
) -> None:
    """Raise :class:`AccessDenied` unless *authorizer* lets *role* read *path*.

    Raises
    ------
    AccessDenied
        If ``authorizer.can_read(path, role)`` is ``False``.
    """
    if authorizer.can_read(path, role):
        logger.debug("role %r authorized to read %s", role, path)
        return
    logger.warning("role %r denied read access to %s", role, path)
    raise AccessDenied(
        f"Role '{role}' is not authorized to read '{path}'",
        details={"path": path, "role": role},
    )
