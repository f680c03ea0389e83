from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ._errors import AliasCycleError


if TYPE_CHECKING:
    from collections.abc import Hashable

    Token = Hashable


logger = logging.getLogger(__name__)


class AliasResolver:
    """Alias -> abstract redirections.

    Chains are followed to their end, so `a -> b -> c` resolves `a` to `c`.
    A chain that returns to any identifier it already passed through raises
    `AliasCycleError`, whether it is `a -> a` or `a -> b -> a`.
    """

    def __init__(self) -> None:
        self._aliases: dict[Any, Any] = {}

    def alias(self, alias: Token, abstract: Token) -> None:
        self._aliases[alias] = abstract
        logger.debug("aliased %r to %r", alias, abstract)

    def remove_alias(self, alias: Token) -> None:
        self._aliases.pop(alias, None)

    def is_alias(self, name: Token) -> bool:
        return name in self._aliases

    def get_alias(self, abstract: Token) -> Any:
        path = [abstract]
        current = abstract
        while current in self._aliases:
            target = self._aliases[current]
            if target in path:
                raise AliasCycleError([*path[path.index(target) :], target])
            path.append(target)
            current = target
        return current
