"""
Kernel test configuration.

Shared fixtures: the counter list component and a fresh mount of it.
"""

import functools

import pytest

from elmish.kernel.counter import counter
from elmish.kernel.list_of import list_of
from elmish.kernel.mount import Mount


@pytest.fixture
def counters():
    return list_of(counter)


@pytest.fixture
def nested():
    return list_of(list_of(counter))


@pytest.fixture
def mount(counters):
    return Mount(counters, history_limit=0)


@pytest.fixture
def apply_all():
    """Fold a list of actions through a component's reducer, starting from init()."""

    def _apply(component, actions, state=None):
        start = component.init() if state is None else state
        return functools.reduce(component.reducer, actions, start)

    return _apply
