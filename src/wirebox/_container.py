from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, overload

from ._aliases import AliasResolver
from ._builder import Builder
from ._cache import InstanceCache
from ._errors import CircularDependencyError, InstantiationError
from ._invoker import Invoker
from ._parameters import ParameterResolver
from ._registry import BindingRegistry, ConcreteKind


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Hashable, Mapping

    T = TypeVar("T")

    Token = Hashable


class Container:
    """Dependency injection container.

    - bind classes, factories or plain values to abstract identifiers
    - singletons and pre-built instances
    - aliases between identifiers
    - constructor injection from type hints, with per-call overrides
    - `call()` with the same injection for functions and methods

    The first container constructed becomes the process-wide default,
    see `get_instance()` / `set_instance()`.
    """

    _default: ClassVar[Container | None] = None
    _default_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._registry = BindingRegistry()
        self._aliases = AliasResolver()
        self._instances = InstanceCache()
        self._parameters = ParameterResolver(self)
        self._builder = Builder(self, self._parameters)
        self._invoker = Invoker(self, self._parameters, self._builder)
        self._build_stack: list[Any] = []
        self._lock = threading.RLock()

        with Container._default_lock:
            if Container._default is None:
                Container._default = self

    # process-wide default

    @classmethod
    def get_instance(cls) -> Container:
        with Container._default_lock:
            if Container._default is None:
                msg = "Empty instance: no default container has been set."
                raise InstantiationError(msg)
            return Container._default

    @classmethod
    def set_instance(cls, container: Container) -> Container:
        with Container._default_lock:
            Container._default = container
        return container

    @classmethod
    def clear_instance(cls) -> None:
        with Container._default_lock:
            Container._default = None

    # registration

    def bind(self, abstract: Token, concrete: object = None, unique: bool = False) -> None:  # noqa: FBT001, FBT002
        """Bind an abstract identifier to a class, factory or value.

        Example:
          container.bind(Engine, V8Engine)
          container.bind("db", lambda c, params: Database(**params), unique=True)
          container.bind(Car)  # Car is its own concrete

        Rebinding drops any cached instance and alias registered under `abstract`.
        """
        with self._lock:
            self._instances.forget(abstract)
            self._aliases.remove_alias(abstract)
            self._registry.bind(abstract, concrete, unique=unique)

    def singleton(self, abstract: Token, concrete: object = None) -> None:
        self.bind(abstract, concrete, unique=True)

    def instance(self, abstract: Token, instance: T) -> T:
        """Register a pre-built instance; `make(abstract)` returns it unless an alias for `abstract` redirects first."""
        with self._lock:
            self._instances.store(abstract, instance)
        logger.debug("registered instance of %s for %r", type(instance).__name__, abstract)
        return instance

    def alias(self, alias: Token, abstract: Token) -> None:
        with self._lock:
            self._aliases.alias(alias, abstract)

    def remove_alias(self, alias: Token) -> None:
        with self._lock:
            self._aliases.remove_alias(alias)

    def is_alias(self, name: Token) -> bool:
        with self._lock:
            return self._aliases.is_alias(name)

    def get_alias(self, abstract: Token) -> Any:
        with self._lock:
            return self._aliases.get_alias(abstract)

    def forget_instance(self, abstract: Token) -> None:
        with self._lock:
            self._instances.forget(abstract)

    def forget_instances(self) -> None:
        with self._lock:
            self._instances.clear()

    # queries

    def get_concrete(self, abstract: Token) -> Any:
        with self._lock:
            return self._registry.get_concrete(abstract)

    def is_unique(self, abstract: Token) -> bool:
        with self._lock:
            return self._registry.is_unique(abstract)

    def bound(self, abstract: Token) -> bool:
        """Whether `abstract` has a binding, an instance or an alias."""
        with self._lock:
            return abstract in self._registry or abstract in self._instances or self._aliases.is_alias(abstract)

    def resolved(self, abstract: Token) -> bool:
        with self._lock:
            return self._aliases.get_alias(abstract) in self._instances

    # resolution

    @overload
    def make(self, abstract: type[T], parameters: Mapping[str, Any] | None = ..., /, **overrides: Any) -> T: ...

    @overload
    def make(self, abstract: Token, parameters: Mapping[str, Any] | None = ..., /, **overrides: Any) -> Any: ...

    def make(self, abstract: Token, parameters: Mapping[str, Any] | None = None, /, **overrides: Any) -> Any:
        """Resolve `abstract` to an instance.

        - aliases are followed first
        - cached singletons and registered instances are returned as-is
        - otherwise the bound concrete (or `abstract` itself) is built,
          and cached when the binding is unique.

        `parameters` and keyword `overrides` are passed by name to the
        constructor or factory in place of injected values.
        """
        params = {**(parameters or {}), **overrides}

        with self._lock:
            abstract = self._aliases.get_alias(abstract)

            cached = self._instances.lookup(abstract)
            if cached is not InstanceCache.MISSING:
                return cached

            if abstract in self._build_stack:
                start = self._build_stack.index(abstract)
                raise CircularDependencyError([*self._build_stack[start:], abstract])

            self._build_stack.append(abstract)
            try:
                instance = self._build(abstract, params)
            finally:
                self._build_stack.pop()

            if self._registry.is_unique(abstract):
                self._instances.store(abstract, instance)
                logger.debug("cached singleton %s for %r", type(instance).__name__, abstract)

            return instance

    def _build(self, abstract: Any, params: Mapping[str, Any]) -> Any:
        binding = self._registry.get(abstract)
        if binding is None:
            return self._builder.build(abstract, params)

        concrete = binding.concrete
        # another identifier of this container: go through it so its own binding/singleton applies
        if binding.kind is ConcreteKind.TYPE and concrete != abstract and self.bound(concrete):
            return self.make(concrete, params)

        return self._builder.build(concrete, params, binding.kind)

    def call(self, callback: Any, parameters: Mapping[str, Any] | None = None, /, **overrides: Any) -> Any:
        """Call a function or method, injecting its parameters.

        Accepted shapes:
          container.call(func)                      # function, lambda, bound method
          container.call("myapp.tasks.run")         # dotted function name
          container.call("Mailer@send", {"to": x})  # Mailer made by the container
          container.call((mailer, "send"))          # instance or class used as-is
        """
        params = {**(parameters or {}), **overrides}
        with self._lock:
            return self._invoker.call(callback, params)

    # map sugar

    def __contains__(self, key: object) -> bool:
        return self.bound(key)

    def __getitem__(self, key: Token) -> Any:
        return self.make(key)

    def __setitem__(self, key: Token, value: object) -> None:
        self.bind(key, value)

    def __delitem__(self, key: Token) -> None:
        with self._lock:
            self._registry.remove(key)
            self._instances.forget(key)
