"""
list_of -- id allocation

Drives long, mixed action sequences and checks after every step:
  - every id ever seen is distinct
  - next_id is strictly greater than every id issued so far
  - items stay in insertion order
"""

import random

import pytest

from elmish.kernel.types import ChildAction, Decrement, Increment, Insert, Remove


def random_actions(seed, n=200):
    rng = random.Random(seed)
    actions = []
    for _ in range(n):
        roll = rng.random()
        target = rng.randrange(0, 40)
        if roll < 0.4:
            actions.append(Insert())
        elif roll < 0.6:
            actions.append(Remove(id=target))
        else:
            inner = Increment() if rng.random() < 0.5 else Decrement()
            actions.append(ChildAction(id=target, inner=inner))
    return actions


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 42])
def test_ids_monotonic_and_unique(counters, seed):
    state = counters.init()
    issued: list[int] = []

    for action in random_actions(seed):
        state = counters.reducer(state, action)
        for item_id in state.ids():
            if item_id not in issued:
                issued.append(item_id)

        assert len(set(issued)) == len(issued)
        if issued:
            assert state.next_id > max(issued)
        assert state.ids() == sorted(state.ids())


def test_next_id_counts_inserts(counters):
    state = counters.init()
    inserts = 0
    for action in random_actions(7):
        state = counters.reducer(state, action)
        if isinstance(action, Insert):
            inserts += 1
        assert state.next_id == inserts
