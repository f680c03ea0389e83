import pytest

from wirebox import CircularDependencyError, Container, InstantiationError


class Chicken:
    def __init__(self, egg: "Egg"):
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken):
        self.chicken = chicken


class Loner:
    def __init__(self, me: "Loner"):
        self.me = me


def test_constructor_cycle_raises():
    c = Container()

    with pytest.raises(CircularDependencyError) as ctx:
        c.make(Chicken)
    assert ctx.value.path == [Chicken, Egg, Chicken]
    assert "Chicken -> Egg -> Chicken" in str(ctx.value)


def test_self_dependency_raises():
    c = Container()

    with pytest.raises(CircularDependencyError):
        c.make(Loner)


def test_circular_dependency_error_is_instantiation_error():
    c = Container()

    with pytest.raises(InstantiationError):
        c.make(Egg)


def test_cycle_through_bindings_raises():
    c = Container()
    c.bind("a", "b")
    c.bind("b", "a")

    with pytest.raises(CircularDependencyError) as ctx:
        c.make("a")
    assert ctx.value.path == ["a", "b", "a"]


def test_factory_resolving_itself_raises():
    c = Container()
    c.bind("self-made", lambda cont: cont.make("self-made"))

    with pytest.raises(CircularDependencyError):
        c.make("self-made")


def test_cycle_can_be_broken_with_override():
    c = Container()
    egg = Egg(chicken=None)

    chicken = c.make(Chicken, egg=egg)
    assert chicken.egg is egg


def test_build_stack_is_unwound_after_failure():
    c = Container()

    with pytest.raises(CircularDependencyError):
        c.make(Chicken)
    c.instance(Egg, Egg(chicken=None))

    assert isinstance(c.make(Chicken), Chicken)
