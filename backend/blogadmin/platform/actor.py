"""
Actor context for attribution and authorization.

The authenticated identity is attached to ``request.state.actor`` by the
authentication middleware in front of this service. Requests without one
run as the anonymous actor (``id=None``), which can read and write but is
never an administrator.

Usage:
    from blogadmin.platform.actor import Actor, get_actor

    @router.delete("/{record_id}")
    async def remove(record_id: str, actor: Actor = Depends(get_actor)):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """Identity performing a mutation."""

    id: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    def has_role(self, roles) -> bool:
        return self.role is not None and self.role in roles


ANONYMOUS = Actor()


def get_actor(request: Request) -> Actor:
    """
    Extract the actor from request state.

    Accepts either an ``Actor`` or a mapping with ``id``/``role`` keys.
    """
    actor = getattr(request.state, "actor", None)
    if actor is None:
        return ANONYMOUS
    if isinstance(actor, Actor):
        return actor
    if isinstance(actor, dict):
        return Actor(id=actor.get("id"), role=actor.get("role"))

    logger.warning(
        "Unrecognized actor on request state, treating as anonymous",
        extra={"path": request.url.path, "actor_type": type(actor).__name__},
    )
    return ANONYMOUS
