"""Request-scoped platform context (actor identity)."""

from blogadmin.platform.actor import Actor, ANONYMOUS, get_actor

__all__ = ["Actor", "ANONYMOUS", "get_actor"]
