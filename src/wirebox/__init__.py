"""Dependency injection container.

Bind abstract identifiers (classes, names or dotted import paths) to classes,
factories or plain values, then let the container build them, injecting
constructor parameters from their type hints.

Exports:
- `Container`: bind/singleton/instance/alias registration, `make()` resolution,
  `call()` injection for functions and methods, and the process-wide default
  container (`Container.get_instance()` / `Container.set_instance()`).
- `ConcreteKind`: how a bound concrete is built (type, factory or value).
- `CallableForm`: the callable shapes `Container.call()` accepts.
- Errors: `ContainerError` and its subclasses `InstantiationError`,
  `CircularDependencyError`, `LogicError`, `AliasCycleError`, `CallableTypeError`.
"""

from ._container import Container
from ._errors import (
    AliasCycleError,
    CallableTypeError,
    CircularDependencyError,
    ContainerError,
    InstantiationError,
    LogicError,
)
from ._invoker import CallableForm
from ._registry import Binding, ConcreteKind


__all__ = [
    "AliasCycleError",
    "Binding",
    "CallableForm",
    "CallableTypeError",
    "CircularDependencyError",
    "ConcreteKind",
    "Container",
    "ContainerError",
    "InstantiationError",
    "LogicError",
]
