from __future__ import annotations

import functools
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Hashable

    Token = Hashable


logger = logging.getLogger(__name__)


class ConcreteKind(Enum):
    TYPE = "type"
    FACTORY = "factory"
    VALUE = "value"

    @classmethod
    def of(cls, concrete: object) -> ConcreteKind:
        """Classify a concrete once, when it is bound.

        - classes and strings (registered keys or dotted import paths) are types
        - functions, lambdas, bound methods and partials are factories
        - anything else is an opaque value
        """
        if inspect.isclass(concrete) or isinstance(concrete, str):
            return cls.TYPE
        if inspect.isroutine(concrete) or isinstance(concrete, functools.partial):
            return cls.FACTORY
        return cls.VALUE


@dataclass(frozen=True)
class Binding:
    concrete: Any
    kind: ConcreteKind
    unique: bool = False


class BindingRegistry:
    """Abstract identifier -> Binding."""

    def __init__(self) -> None:
        self._bindings: dict[Any, Binding] = {}

    def bind(self, abstract: Token, concrete: object = None, *, unique: bool = False) -> Binding:
        if concrete is None:
            concrete = abstract

        binding = Binding(concrete=concrete, kind=ConcreteKind.of(concrete), unique=unique)
        self._bindings[abstract] = binding
        logger.debug("bound %r to %r (%s, unique=%s)", abstract, concrete, binding.kind.value, unique)
        return binding

    def get(self, abstract: Token) -> Binding | None:
        return self._bindings.get(abstract)

    def get_concrete(self, abstract: Token) -> Any:
        binding = self._bindings.get(abstract)
        return binding.concrete if binding is not None else abstract

    def is_unique(self, abstract: Token) -> bool:
        binding = self._bindings.get(abstract)
        return binding.unique if binding is not None else False

    def remove(self, abstract: Token) -> None:
        self._bindings.pop(abstract, None)

    def __contains__(self, abstract: object) -> bool:
        return abstract in self._bindings
