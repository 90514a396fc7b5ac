from __future__ import annotations

from typing import TYPE_CHECKING

from concertinfo.errors import UnknownTargetError

if TYPE_CHECKING:
    from concertinfo.targets.base import TargetResolver

TARGET_REGISTRY: dict[str, type[TargetResolver]] = {}


def register_target(key: str):
    """Decorator to register a target class under a key."""
    def decorator(cls):
        cls.key = key
        TARGET_REGISTRY[key] = cls
        return cls
    return decorator


def get_target(key: str) -> TargetResolver:
    """Return a target instance for the given key."""
    if key not in TARGET_REGISTRY:
        raise UnknownTargetError(key)
    return TARGET_REGISTRY[key]()


def list_target_keys() -> list[str]:
    """Return all registered target keys."""
    return sorted(TARGET_REGISTRY.keys())
