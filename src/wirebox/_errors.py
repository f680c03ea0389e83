from __future__ import annotations


class ContainerError(RuntimeError):
    """Base class for every error raised by the container."""


class InstantiationError(ContainerError):
    """The target cannot be constructed, or no default container has been set."""


class CircularDependencyError(InstantiationError):
    def __init__(self, path: list[object]) -> None:
        self.path = list(path)
        chain = " -> ".join(_describe(token) for token in self.path)
        super().__init__(f"Circular dependency detected while resolving: {chain}")


class LogicError(ContainerError):
    pass


class AliasCycleError(LogicError):
    def __init__(self, path: list[object]) -> None:
        self.path = list(path)
        self.abstract = self.path[0]
        if len(self.path) <= 2:
            msg = f"[{_describe(self.abstract)}] is aliased to itself."
        else:
            chain = " -> ".join(_describe(token) for token in self.path)
            msg = f"[{_describe(self.abstract)}] is aliased to itself through: {chain}"
        super().__init__(msg)


class CallableTypeError(ContainerError, TypeError):
    """`call()` received something that is not one of the supported callable shapes."""


def _describe(token: object) -> str:
    return getattr(token, "__qualname__", None) or str(token)
