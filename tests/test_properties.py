import math

import pytest
from hookes_law.core.properties import ObservableValue, DerivedValue, commit
from hookes_law.errors import ConfigurationError, RangeError
from hookes_law.types import Range


def test_set_notifies_new_and_old():
    """Listeners receive (new, old); writing an equal value is silent."""
    v = ObservableValue(0.0, name="v")
    seen = []
    v.subscribe(lambda new, old: seen.append((new, old)))

    v.set(2.0)
    v.set(2.0)

    assert seen == [(2.0, 0.0)]
    assert v.value == 2.0


def test_link_fires_immediately():
    v = ObservableValue(1.0, name="v")
    seen = []
    v.link(lambda new, old: seen.append((new, old)))
    assert seen == [(1.0, None)]


def test_unsubscribe():
    v = ObservableValue(0.0, name="v")
    seen = []
    listener = lambda new, old: seen.append(new)
    v.subscribe(listener)
    v.unsubscribe(listener)
    v.set(1.0)

    assert seen == []
    assert v.listener_count == 0
    with pytest.raises(ValueError):
        v.unsubscribe(listener)


def test_out_of_range_write_is_rejected():
    v = ObservableValue(0.0, valid_range=Range(-1, 1), name="v")
    with pytest.raises(RangeError) as info:
        v.set(1.5)
    assert v.value == 0.0
    assert info.value.name == "v"
    assert info.value.value == 1.5

    # Bounds are inclusive
    v.set(1.0)
    assert v.value == 1.0


def test_non_finite_and_non_numeric_writes():
    v = ObservableValue(0.0, name="v")
    with pytest.raises(RangeError):
        v.set(math.nan)
    with pytest.raises(RangeError):
        v.set(math.inf)
    with pytest.raises(TypeError):
        v.set("1.0")
    assert v.value == 0.0


def test_numeric_cell_coerces_ints():
    v = ObservableValue(0.0, name="v")
    v.set(3)
    assert isinstance(v.value, float)
    assert v.value == 3.0


def test_invalid_initial_value():
    with pytest.raises(ConfigurationError):
        ObservableValue(5.0, valid_range=Range(0, 1), name="v")
    with pytest.raises(ConfigurationError):
        ObservableValue(3, valid_values=(1, 2), name="n")


def test_valid_values():
    n = ObservableValue(1, valid_values=(1, 2), name="n")
    n.set(2)
    assert n.value == 2
    with pytest.raises(RangeError):
        n.set(3)
    assert n.value == 2


def test_reset_restores_initial_value():
    v = ObservableValue(0.5, valid_range=Range(0, 1), name="v")
    v.set(0.9)
    v.reset()
    assert v.value == 0.5
    assert v.initial_value == 0.5


def test_derived_value_tracks_all_sources():
    a = ObservableValue(1.0, name="a")
    b = ObservableValue(2.0, name="b")
    total = DerivedValue([a, b], lambda x, y: x + y, name="total")
    assert total.value == 3.0

    a.set(3.0)
    assert total.value == 5.0
    b.set(-1.0)
    assert total.value == 2.0


def test_derived_value_notifies_once_per_commit():
    """Two sources changing in one commit produce a single derived notification."""
    a = ObservableValue(1.0, name="a")
    b = ObservableValue(2.0, name="b")
    product = DerivedValue([a, b], lambda x, y: x * y, name="product")
    seen = []
    product.subscribe(lambda new, old: seen.append((new, old)))

    commit([(a, 2.0), (b, 5.0)])

    assert seen == [(10.0, 2.0)]


def test_listeners_observe_settled_state():
    a = ObservableValue(1.0, name="a")
    b = ObservableValue(2.0, name="b")
    total = DerivedValue([a, b], lambda x, y: x + y, name="total")
    snapshots = []
    a.subscribe(lambda new, old: snapshots.append((a.value, b.value, total.value)))

    commit([(a, 3.0), (b, 4.0)])

    assert snapshots == [(3.0, 4.0, 7.0)]


def test_sources_notify_before_derived():
    a = ObservableValue(0.0, name="a")
    doubled = DerivedValue([a], lambda x: 2 * x, name="doubled")
    order = []
    # Subscribe to the derived value first; it must still fire second
    doubled.subscribe(lambda new, old: order.append("doubled"))
    a.subscribe(lambda new, old: order.append("a"))

    a.set(1.0)

    assert order == ["a", "doubled"]


def test_written_cells_notify_before_any_derived_cell():
    a = ObservableValue(0.0, name="a")
    b = ObservableValue(0.0, name="b")
    doubled = DerivedValue([a], lambda x: 2 * x, name="doubled")
    order = []
    doubled.subscribe(lambda new, old: order.append("doubled"))
    a.subscribe(lambda new, old: order.append("a"))
    b.subscribe(lambda new, old: order.append("b"))

    commit([(a, 1.0), (b, 1.0)])

    assert order == ["a", "b", "doubled"]


def test_chained_derived_values():
    x = ObservableValue(1.0, name="x")
    y = DerivedValue([x], lambda v: v + 1, name="y")
    z = DerivedValue([y], lambda v: v * 10, name="z")
    seen = []
    x.subscribe(lambda new, old: seen.append(z.value))

    x.set(2.0)

    assert y.value == 3.0
    assert z.value == 30.0
    assert seen == [30.0]


def test_commit_is_atomic():
    a = ObservableValue(0.0, valid_range=Range(-1, 1), name="a")
    b = ObservableValue(0.0, valid_range=Range(-1, 1), name="b")
    seen = []
    a.subscribe(lambda new, old: seen.append(new))

    with pytest.raises(RangeError):
        commit([(a, 0.5), (b, 2.0)])

    assert a.value == 0.0
    assert b.value == 0.0
    assert seen == []


def test_commit_rejects_duplicate_cells():
    a = ObservableValue(0.0, name="a")
    with pytest.raises(ValueError):
        commit([(a, 1.0), (a, 2.0)])
    assert a.value == 0.0


def test_reentrant_write_is_rejected():
    """A listener writing back to the cell that is notifying cannot start a cycle."""
    a = ObservableValue(0.0, name="a")
    echo = lambda new, old: a.set(new + 1.0)
    a.subscribe(echo)

    with pytest.raises(RuntimeError):
        a.set(1.0)
    assert a.value == 1.0

    # The lock is released after the failed notification
    a.unsubscribe(echo)
    a.set(2.0)
    assert a.value == 2.0


def test_dispose_detaches_derived_value():
    a = ObservableValue(1.0, name="a")
    neg = DerivedValue([a], lambda v: -v, name="neg")
    neg.dispose()
    a.set(5.0)
    assert neg.value == -1.0
