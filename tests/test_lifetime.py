import unittest

import pytest

from wirebox import Container


class TestLifetimeControl(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_make_singleton_returns_same_instance(self):
        class A: ...

        self.cont.singleton(A)
        a1 = self.cont.make(A)
        a2 = self.cont.make(A)
        assert a2 is a1, "singleton should return the cached instance"

    def test_make_unique_bind_returns_same_instance(self):
        class A: ...

        self.cont.bind("a", A, unique=True)
        assert self.cont.make("a") is self.cont.make("a")

    def test_make_transient_returns_new_instances(self):
        class A: ...

        self.cont.bind(A, A)
        a1 = self.cont.make(A)
        a2 = self.cont.make(A)
        assert a2 is not a1, "non-unique bindings should return new instances"

    def test_unique_factory_is_called_once(self):
        calls = []

        def factory(cont):
            calls.append(cont)
            return object()

        self.cont.singleton("thing", factory)
        assert self.cont.make("thing") is self.cont.make("thing")
        assert len(calls) == 1

    def test_instance_is_always_returned(self):
        class A: ...

        inst = A()
        returned = self.cont.instance(A, inst)
        assert returned is inst
        assert self.cont.make(A) is inst
        assert self.cont.make(A) is inst

    def test_instance_wins_over_binding(self):
        class A: ...

        class B(A): ...

        inst = A()
        self.cont.bind(A, B)
        self.cont.instance(A, inst)
        assert self.cont.make(A) is inst

    def test_instance_can_be_none(self):
        self.cont.instance("nothing", None)
        assert self.cont.make("nothing") is None

    def test_instance_keeps_alias_for_same_key(self):
        self.cont.instance("target", "from-target")
        self.cont.alias("key", "target")
        self.cont.instance("key", "from-key")

        assert self.cont.is_alias("key")
        assert self.cont.make("key") == "from-target"

    def test_instance_under_alias_name_applies_after_alias_removed(self):
        class Engine: ...

        class V8Engine(Engine): ...

        self.cont.bind(Engine, V8Engine)
        self.cont.alias("engine", Engine)
        self.cont.instance("engine", "cached")

        assert self.cont.is_alias("engine")
        assert isinstance(self.cont.make("engine"), V8Engine)

        self.cont.remove_alias("engine")
        assert self.cont.make("engine") == "cached"

    def test_rebind_clears_cached_instance(self):
        class B: ...

        class C: ...

        self.cont.bind("a", B)
        value = object()
        self.cont.instance("a", value)
        self.cont.bind("a", C)

        rebuilt = self.cont.make("a")
        assert rebuilt is not value
        assert isinstance(rebuilt, C)

    def test_rebind_clears_cached_singleton(self):
        class A: ...

        self.cont.singleton(A)
        first = self.cont.make(A)
        self.cont.singleton(A)
        assert self.cont.make(A) is not first

    def test_forget_instance(self):
        class A: ...

        self.cont.singleton(A)
        first = self.cont.make(A)
        self.cont.forget_instance(A)
        second = self.cont.make(A)
        assert second is not first
        assert self.cont.make(A) is second

    def test_forget_instances(self):
        self.cont.instance("a", 1)
        self.cont.instance("b", 2)
        self.cont.forget_instances()

        assert not self.cont.resolved("a")
        assert not self.cont.resolved("b")

    def test_failed_build_does_not_cache_singleton(self):
        attempts = []

        class Flaky:
            def __init__(self, fail: bool = True):
                attempts.append(fail)
                if len(attempts) == 1:
                    msg = "first build fails"
                    raise RuntimeError(msg)

        self.cont.singleton(Flaky)

        with pytest.raises(RuntimeError, match="first build fails"):
            self.cont.make(Flaky)
        assert not self.cont.resolved(Flaky)

        built = self.cont.make(Flaky)
        assert self.cont.make(Flaky) is built
        assert len(attempts) == 2
