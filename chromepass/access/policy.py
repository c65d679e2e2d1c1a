"""Modification rights on credentials, projects and teams."""

from typing import Protocol

from chromepass.access.exceptions import NotOwnerError
from chromepass.user.models import User


class Owned(Protocol):
    created_by_id: int | None


def can_modify(actor: User, resource: Owned) -> bool:
    return actor.is_admin or (
        resource.created_by_id is not None and resource.created_by_id == actor.id
    )


def ensure_can_modify(actor: User, resource: Owned, action: str, kind: str) -> None:
    """Raise ``NotOwnerError`` unless ``actor`` created ``resource`` or is an admin.

    ``action`` and ``kind`` only shape the message, e.g. ``"update"`` and
    ``"credential"``.
    """
    if not can_modify(actor, resource):
        raise NotOwnerError(f"Not authorized to {action} this {kind}")
