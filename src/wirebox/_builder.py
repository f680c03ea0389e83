from __future__ import annotations

import importlib
import inspect
import logging
from typing import TYPE_CHECKING, Any

from ._errors import InstantiationError
from ._parameters import ParameterResolver, is_instantiable, signature_of
from ._registry import ConcreteKind


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ._container import Container


logger = logging.getLogger(__name__)


class Builder:
    """Turn a concrete (type, factory or value) into an instance."""

    def __init__(self, container: Container, parameters: ParameterResolver) -> None:
        self._container = container
        self._parameters = parameters

    def build(self, concrete: Any, overrides: Mapping[str, Any], kind: ConcreteKind | None = None) -> Any:
        if kind is None:
            kind = ConcreteKind.of(concrete)

        if kind is ConcreteKind.FACTORY:
            return self._call_factory(concrete, overrides)

        if kind is ConcreteKind.VALUE:
            return concrete

        cls = self.import_type(concrete) if isinstance(concrete, str) else concrete
        return self.construct(cls, overrides)

    def construct(self, cls: type, overrides: Mapping[str, Any]) -> Any:
        if not is_instantiable(cls):
            msg = f"Target [{cls.__qualname__}] is not instantiable."
            raise InstantiationError(msg)

        sig = signature_of(cls)
        if sig is None or not sig.parameters:
            return cls()

        args, kwargs = self._parameters.resolve(cls, overrides, sig)
        return cls(*args, **kwargs)

    def import_type(self, name: str) -> type:
        """Import a class from a dotted path such as ``"myapp.engines.V8Engine"``."""
        target = import_object(name)
        if not inspect.isclass(target):
            msg = f"Target [{name}] is not instantiable."
            raise InstantiationError(msg)
        return target

    def _call_factory(self, factory: Callable[..., Any], overrides: Mapping[str, Any]) -> Any:
        args = (self._container, dict(overrides))
        return factory(*args[: _factory_arity(factory)])


def import_object(name: str) -> Any:
    module_name, _, attr = name.rpartition(".")
    if not module_name:
        msg = f"Target [{name}] is not instantiable."
        raise InstantiationError(msg)

    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as exc:
        logger.debug("cannot import %r: %s", name, exc)
        msg = f"Target [{name}] is not instantiable."
        raise InstantiationError(msg) from exc


def _factory_arity(factory: Callable[..., Any]) -> int:
    """How many of (container, overrides) the factory accepts positionally."""
    sig = signature_of(factory)
    if sig is None:
        return 2

    count = 0
    for p in sig.parameters.values():
        if p.kind is p.VAR_POSITIONAL:
            return 2
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
            count += 1

    return min(count, 2)
