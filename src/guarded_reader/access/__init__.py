"""guarded-reader access authorizer capability.

* **PathAllowListAuthorizer** -- one authorizer for every file format:
  admin bypass plus a case-insensitive path allow-list.
* **ensure_authorized** -- turns a negative decision into
  :class:`~guarded_reader.core.errors.AccessDenied`.
"""
from __future__ import annotations

from guarded_reader.access.authorizer import (
    DEFAULT_ADMIN_ROLE,
    PathAllowListAuthorizer,
    ensure_authorized,
)

__all__ = [
    "DEFAULT_ADMIN_ROLE",
    "PathAllowListAuthorizer",
    "ensure_authorized",
]
