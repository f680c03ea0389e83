from __future__ import annotations

import functools
import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any

from ._builder import import_object
from ._errors import CallableTypeError, InstantiationError


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ._builder import Builder
    from ._container import Container
    from ._parameters import ParameterResolver


class CallableForm(Enum):
    FUNCTION = "function"  # function object, lambda, bound method or dotted "module.func" name
    CLASS_METHOD = "class@method"  # "ClassName@method", class resolved through the container
    TARGET_METHOD = "target-method"  # (instance or class, "method"), target used as-is


class Invoker:
    def __init__(self, container: Container, parameters: ParameterResolver, builder: Builder) -> None:
        self._container = container
        self._parameters = parameters
        self._builder = builder

    def call(self, callback: Any, overrides: Mapping[str, Any]) -> Any:
        func = self.resolve_callable(callback)
        args, kwargs = self._parameters.resolve(func, overrides)
        return func(*args, **kwargs)

    def resolve_callable(self, callback: Any) -> Callable[..., Any]:
        form = classify(callback)

        if form is CallableForm.CLASS_METHOD:
            class_name, _, method = callback.partition("@")
            return _method_of(self._container.make(class_name), method)

        if form is CallableForm.TARGET_METHOD:
            target, method = callback
            if isinstance(target, str):
                target = self._builder.import_type(target)
            return _method_of(target, method)

        if isinstance(callback, str):
            return _import_function(callback)

        return callback


def classify(callback: Any) -> CallableForm:
    """Decide which of the supported shapes `callback` is; raise for anything else."""
    if isinstance(callback, str):
        if "@" in callback:
            class_name, _, method = callback.partition("@")
            if not class_name or not method:
                msg = f"Types not allowed to appear: {callback!r} is not 'Class@method'"
                raise CallableTypeError(msg)
            return CallableForm.CLASS_METHOD
        return CallableForm.FUNCTION

    if isinstance(callback, (tuple, list)):
        if len(callback) == 2 and isinstance(callback[1], str):
            return CallableForm.TARGET_METHOD
        msg = f"Types not allowed to appear: {callback!r} is not a (target, method name) pair"
        raise CallableTypeError(msg)

    if inspect.isroutine(callback) or isinstance(callback, functools.partial):
        return CallableForm.FUNCTION

    msg = f"Types not allowed to appear: {type(callback).__name__}"
    raise CallableTypeError(msg)


def _method_of(target: Any, method: str) -> Callable[..., Any]:
    func = getattr(target, method, None)
    if func is None or not callable(func):
        owner = target.__qualname__ if inspect.isclass(target) else type(target).__qualname__
        msg = f"Method {owner}.{method}() does not exist."
        raise CallableTypeError(msg)

    # instance methods looked up on the class itself have no instance to run on
    if inspect.isclass(target) and inspect.isfunction(func):
        params = list(inspect.signature(func).parameters)
        if params and params[0] == "self":
            msg = f"Method {target.__qualname__}.{method}() needs an instance; pass one or use 'Class@method'."
            raise CallableTypeError(msg)
    return func


def _import_function(name: str) -> Callable[..., Any]:
    try:
        func = import_object(name)
    except InstantiationError as exc:
        msg = f"Function {name}() does not exist."
        raise CallableTypeError(msg) from exc

    if not callable(func):
        msg = f"Function {name}() does not exist."
        raise CallableTypeError(msg)
    return func
