from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from vres.api.config import VirtualResolutionConfig
from vres.api.display import StaticDisplaySize
from vres.runtime.context import VirtualResolution
from vres.runtime.dispatch import TouchDispatcher


class FakeHostNode:
    """Host-engine style node that keeps children in a plain list."""

    def __init__(self, name: str, *, x: float = 0.0, y: float = 0.0) -> None:
        self.name = name
        self.x = x
        self.y = y
        self.x_scale = 1.0
        self.y_scale = 1.0
        self.parent: FakeHostNode | None = None
        self.child_list: list[FakeHostNode] = []
        self.insert_calls: list[str] = []

    @property
    def children(self) -> tuple["FakeHostNode", ...]:
        return tuple(self.child_list)

    def add_child(self, child: "FakeHostNode") -> None:
        self.insert_calls.append(child.name)
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.child_list.append(child)

    def remove_child(self, child: "FakeHostNode") -> None:
        self.child_list.remove(child)
        child.parent = None

    def remove_from_parent(self) -> None:
        if self.parent is not None:
            self.parent.remove_child(self)


def fake_host_node_factory(*, x: float, y: float, x_scale: float, y_scale: float) -> FakeHostNode:
    node = FakeHostNode("scaler", x=x, y=y)
    node.x_scale = x_scale
    node.y_scale = y_scale
    return node


class StepCycleOracle:
    """Oracle driven manually by tests: a new cycle starts after ``advance``."""

    def __init__(self) -> None:
        self.cycle = 0

    def advance(self) -> None:
        self.cycle += 1

    def is_new_delivery_cycle(self, event: Any) -> bool:
        if event.annotations.get("test.cycle") == self.cycle:
            return False
        event.annotations["test.cycle"] = self.cycle
        return True


def recorder(sink: list[tuple[str, float, float]], label: str) -> Callable[[Any], None]:
    def listener(event: Any) -> None:
        sink.append((label, event.x, event.y))

    return listener


@pytest.fixture
def display() -> StaticDisplaySize:
    return StaticDisplaySize(1200, 1280)


@pytest.fixture
def dispatcher() -> TouchDispatcher:
    return TouchDispatcher()


@pytest.fixture
def vr(display: StaticDisplaySize, dispatcher: TouchDispatcher) -> VirtualResolution:
    context = VirtualResolution(display, dispatcher=dispatcher, trace_touch=False)
    context.initialise(VirtualResolutionConfig(user_width=480, user_height=640))
    return context
