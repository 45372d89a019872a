"""Resolve the audience of a notification."""

from __future__ import annotations

from sjfulfillment.domain.entities import NotificationTarget, UserRole
from sjfulfillment.domain.errors import ValidationError


def resolve_target(
    *,
    recipient_id: int | None = None,
    recipient_role: str | UserRole | None = None,
    is_global: bool = False,
) -> NotificationTarget:
    """Return the single audience described by the arguments.

    Exactly one of ``recipient_id``, ``recipient_role`` and ``is_global``
    must be given. Role aliases are normalised to their canonical form.
    """

    role: str | None = None
    if recipient_role is not None:
        if isinstance(recipient_role, UserRole):
            role = recipient_role.value
        elif recipient_role.strip():
            try:
                role = UserRole.parse(recipient_role).value
            except ValueError as exc:
                raise ValidationError(str(exc)) from None
        else:
            raise ValidationError("recipientRole must not be blank")

    modes = sum((recipient_id is not None, role is not None, bool(is_global)))
    if modes == 0:
        raise ValidationError(
            "One of recipientId, recipientRole or isGlobal must be specified"
        )
    if modes > 1:
        raise ValidationError(
            "Only one of recipientId, recipientRole or isGlobal may be specified"
        )

    if recipient_id is not None and recipient_id <= 0:
        raise ValidationError("recipientId must be a positive integer")

    return NotificationTarget(
        recipient_id=recipient_id, recipient_role=role, is_global=bool(is_global)
    )


def resolve_broadcast_target(
    *, recipient_role: str | None = None, is_global: bool = False
) -> NotificationTarget:
    """Resolve the audience of an admin broadcast (role or global only)."""

    has_role = recipient_role is not None and bool(recipient_role.strip())
    if has_role and is_global:
        raise ValidationError("Cannot specify both recipientRole and isGlobal")
    if not has_role and not is_global:
        raise ValidationError("Either recipientRole or isGlobal must be specified")
    return resolve_target(
        recipient_role=recipient_role if has_role else None, is_global=is_global
    )


__all__ = ["resolve_broadcast_target", "resolve_target"]
