from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Hashable

    Token = Hashable


_MISSING = object()


class InstanceCache:
    """Already-built singletons and instances registered with `Container.instance`.

    `None` is a valid cached value, so lookups go through `lookup()` which
    returns the `MISSING` sentinel on a miss.
    """

    MISSING = _MISSING

    def __init__(self) -> None:
        self._instances: dict[Any, Any] = {}

    def store(self, abstract: Token, instance: object) -> None:
        self._instances[abstract] = instance

    def lookup(self, abstract: Token) -> Any:
        return self._instances.get(abstract, _MISSING)

    def forget(self, abstract: Token) -> None:
        self._instances.pop(abstract, None)

    def clear(self) -> None:
        self._instances.clear()

    def __contains__(self, abstract: object) -> bool:
        return abstract in self._instances
