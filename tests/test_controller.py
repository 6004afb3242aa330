"""Tests for controller lookups, append and host-app binding."""

from types import SimpleNamespace

import pytest

from chainmgr import (
    ChainConfig,
    ChainController,
    Layer,
    StackNotFoundError,
    noop_action,
)


def make_handler(tag):
    def handler(req, res, next):
        req.append(tag)
        next()

    handler.__name__ = f"handler_{tag}"
    return handler


@pytest.fixture
def layers() -> list[Layer]:
    return [Layer(n, make_handler(n)) for n in ("logger", "auth", "router")]


@pytest.fixture
def stack(layers: list[Layer]) -> list[Layer]:
    return list(layers)


@pytest.fixture
def chain(stack: list[Layer]) -> ChainController:
    return ChainController(stack)


class TestConstruction:
    def test_aliases_stack(self, stack: list[Layer], chain: ChainController):
        assert chain.stack is stack

    def test_default_config(self, chain: ChainController):
        assert chain.config == ChainConfig()

    def test_len_and_iter(self, chain: ChainController, layers: list[Layer]):
        assert len(chain) == 3
        assert [h.element for h in chain] == layers

    def test_iter_yields_registered_handles(self, chain: ChainController):
        handles = list(chain)
        assert handles[1] is chain.get_by_position(1)


class TestFromApp:
    def test_express_style_app(self, stack: list[Layer]):
        app = SimpleNamespace(_router=SimpleNamespace(stack=stack))
        chain = ChainController.from_app(app)
        assert chain.stack is stack
        assert chain.get_by_name("auth").element is stack[1]

    def test_custom_stack_path(self, stack: list[Layer]):
        app = SimpleNamespace(user_middleware=stack)
        chain = ChainController.from_app(app, ChainConfig(stack_path="user_middleware"))
        assert chain.stack is stack

    def test_missing_path(self):
        with pytest.raises(StackNotFoundError, match="_router.stack"):
            ChainController.from_app(SimpleNamespace())

    def test_not_a_sequence(self):
        app = SimpleNamespace(_router=SimpleNamespace(stack={"a": 1}))
        with pytest.raises(StackNotFoundError, match="not a mutable sequence"):
            ChainController.from_app(app)


class TestGetByPosition:
    def test_in_range(self, chain: ChainController, layers: list[Layer]):
        assert chain.get_by_position(0).element is layers[0]
        assert chain.get_by_position(2).element is layers[2]

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_out_of_range(self, chain: ChainController, index: int):
        assert chain.get_by_position(index) is None

    def test_same_handle_each_time(self, chain: ChainController):
        assert chain.get_by_position(1) is chain.get_by_position(1)


class TestGetByName:
    def test_unique(self, chain: ChainController, layers: list[Layer]):
        assert chain.get_by_name("auth").element is layers[1]

    def test_missing(self, chain: ChainController):
        assert chain.get_by_name("nope") is None

    def test_ambiguous_and_occurrence(self, chain: ChainController):
        x1 = Layer("X", make_handler("x1"))
        x2 = Layer("X", make_handler("x2"))
        chain.append(x1)
        chain.append(x2)
        assert chain.get_by_name("X") is None
        assert chain.get_by_name("X", 0).element is x1
        assert chain.get_by_name("X", 1).element is x2
        assert chain.get_by_name("X", 2) is None
        assert chain.get_by_name("X", -1) is None

    def test_get_all_by_name(self, chain: ChainController):
        x1 = chain.append(Layer("X", make_handler("x1")))
        x2 = chain.append(Layer("X", make_handler("x2")))
        assert chain.get_all_by_name("X") == [x1, x2]
        assert chain.get_all_by_name("nope") == []

    def test_custom_name_attr(self):
        entries = [SimpleNamespace(cls="GZip", handle=make_handler("g"))]
        chain = ChainController(entries, ChainConfig(name_attr="cls"))
        assert chain.get_by_name("GZip").element is entries[0]


class TestGetByAction:
    def test_enabled(self, chain: ChainController, layers: list[Layer]):
        assert chain.get_by_action(layers[2].handle).element is layers[2]

    def test_disabled_matches_saved_action(self, chain: ChainController, layers: list[Layer]):
        original = layers[1].handle
        handle = chain.get_by_name("auth")
        handle.disable()
        assert chain.get_by_action(original) is handle

    def test_placeholder_never_matches(self, chain: ChainController):
        chain.get_by_name("auth").disable()
        assert chain.get_by_action(noop_action) is None

    def test_unknown(self, chain: ChainController):
        assert chain.get_by_action(make_handler("other")) is None


class TestGetByElement:
    def test_present(self, chain: ChainController, layers: list[Layer]):
        handle = chain.get_by_element(layers[0])
        assert handle is chain.get_by_element(layers[0])
        assert handle is chain.get_by_position(0)

    def test_absent_not_registered(self, chain: ChainController):
        stranger = Layer("stranger", make_handler("s"))
        assert chain.get_by_element(stranger) is None
        assert stranger not in chain._registry


class TestMostRecentAndAppend:
    def test_most_recent(self, chain: ChainController, layers: list[Layer]):
        assert chain.get_most_recent().element is layers[-1]

    def test_most_recent_empty(self):
        assert ChainController([]).get_most_recent() is None

    def test_append(self, chain: ChainController, stack: list[Layer]):
        layer = Layer("late", make_handler("late"))
        handle = chain.append(layer)
        assert stack[-1] is layer
        assert handle is chain.get_most_recent()
        assert handle.enabled is True
