from __future__ import annotations

import functools
import inspect
import logging
import types
import typing
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin, get_type_hints


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ._container import Container


logger = logging.getLogger(__name__)

_EMPTY = inspect.Parameter.empty


class ParameterResolver:
    """Turn a callable's signature into the arguments to call it with.

    Resolution precedence for every named parameter:
    1. explicit override (by parameter name)
    2. annotated type known to the container, or a concrete non-builtin class
    3. default value
    4. None.
    """

    def __init__(self, container: Container) -> None:
        self._container = container

    def resolve(
        self,
        func: Callable[..., Any],
        overrides: Mapping[str, Any],
        sig: inspect.Signature | None = None,
    ) -> tuple[list[Any], dict[str, Any]]:
        if sig is None:
            sig = signature_of(func)
        if sig is None:
            return [], {}

        hints = get_hints(func)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        consumed: set[str] = set()
        var_keyword = False

        for name, p in sig.parameters.items():
            if p.kind is p.VAR_POSITIONAL:
                continue
            if p.kind is p.VAR_KEYWORD:
                var_keyword = True
                continue

            if name in overrides:
                value = overrides[name]
                consumed.add(name)
            else:
                value = self.resolve_param(p, hints.get(name, _EMPTY))

            if p.kind is p.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[name] = value

        # unmatched overrides only go somewhere when there is a **kwargs to take them
        if var_keyword:
            kwargs.update({k: v for k, v in overrides.items() if k not in consumed})

        return args, kwargs

    def resolve_param(self, p: inspect.Parameter, hint: Any) -> Any:
        target = _unwrap_optional(hint)

        if target is not _EMPTY and self._is_resolvable(target, has_default=p.default is not _EMPTY):
            return self._container.make(target)

        if p.default is not _EMPTY:
            return p.default

        return None

    def _is_resolvable(self, hint: Any, *, has_default: bool) -> bool:
        try:
            if self._container.bound(hint):
                return True
        except TypeError:
            # unhashable annotations (e.g. some typing constructs) are never keys
            return False

        if not inspect.isclass(hint) or hint.__module__ == "builtins":
            return False

        # An unbound interface with a default falls back to the default instead of failing.
        return not (has_default and not is_instantiable(hint))


def signature_of(func: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def get_hints(func: Callable[..., Any]) -> dict[str, Any]:
    while isinstance(func, functools.partial):
        func = func.func

    target: Any = func
    if inspect.isclass(func):
        target = inspect.getattr_static(func, "__init__")

    try:
        hints = get_type_hints(target)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning(
            "'%s' name error retrieving %s type hints",
            exc.name,
            getattr(func, "__qualname__", repr(func)),
        )
        hints = {}

    return hints


def is_instantiable(cls: type) -> bool:
    return not (inspect.isabstract(cls) or is_protocol(cls))


if hasattr(typing, "is_protocol"):
    # https://docs.python.org/3/library/typing.html#typing.is_protocol
    def is_protocol(tp: Any) -> bool:
        return inspect.isclass(tp) and typing.is_protocol(tp)

else:

    def is_protocol(tp: Any) -> bool:
        """Detect whether 'tp' is itself a Protocol (not a concrete class implementing one)."""
        return inspect.isclass(tp) and bool(tp.__dict__.get("_is_protocol", False))


def _unwrap_optional(hint: Any) -> Any:
    if get_origin(hint) not in (Union, types.UnionType):
        return hint

    members = [arg for arg in get_args(hint) if arg is not type(None)]
    if len(members) == 1:
        return members[0]
    return _EMPTY
