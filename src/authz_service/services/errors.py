"""
authz_service.services.errors

Errors raised by the role service.
"""

from __future__ import annotations

import enum


class RejectReason(enum.StrEnum):
    unknown_member = "UNKNOWN_MEMBER"
    role_not_found = "ROLE_NOT_FOUND"
    name_taken = "NAME_TAKEN"
    store_rejected = "STORE_REJECTED"


class RoleRequestRejected(Exception):
    """The request cannot be satisfied; always surfaced to callers as a client error."""

    def __init__(self, reason: RejectReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason
