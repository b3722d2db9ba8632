import numpy as np
import pytest
from hookes_law import Spring, Range, ConfigurationError, RangeError
from hookes_law.core.invariants import check_spring


def make_spring(**kwargs):
    options = dict(spring_constant=200, spring_constant_range=(100, 1000), applied_force_range=(-100, 100))
    options.update(kwargs)
    return Spring(**options)


def test_initial_state():
    spring = make_spring()
    assert spring.applied_force == 0.0
    assert spring.displacement == 0.0
    assert spring.spring_constant == 200.0
    assert spring.length == spring.equilibrium_position
    assert spring.spring_force == 0.0
    assert spring.potential_energy == 0.0
    # widest displacement reachable at minimum stiffness
    assert spring.displacement_range == Range(-1.0, 1.0)


def test_applied_force_scenario():
    """k=200 N/m, F=50 N -> x=0.25 m, spring force -50 N."""
    spring = make_spring()
    spring.set_applied_force(50)

    assert spring.displacement == pytest.approx(0.25)
    assert spring.spring_force == pytest.approx(-50.0)
    assert spring.length == pytest.approx(spring.equilibrium_position + 0.25)
    assert spring.potential_energy == pytest.approx(6.25)


def test_set_displacement_round_trip():
    spring = make_spring()
    spring.set_displacement(0.3)

    assert spring.displacement == 0.3
    assert spring.applied_force == pytest.approx(200 * 0.3)


def test_set_spring_constant_holds_applied_force():
    spring = make_spring()
    spring.set_applied_force(50)
    spring_force_changes = []
    spring.spring_force_property.subscribe(lambda new, old: spring_force_changes.append(new))

    spring.set_spring_constant(400)

    assert spring.applied_force == 50.0
    assert spring.displacement == pytest.approx(0.125)
    assert spring_force_changes == []


def test_set_spring_constant_holds_displacement():
    spring = make_spring(holds="displacement")
    spring.set_displacement(0.2)
    spring.set_spring_constant(400)

    assert spring.displacement == 0.2
    assert spring.applied_force == pytest.approx(80.0)


def test_idempotent_applied_force():
    once = make_spring()
    once.set_applied_force(37)
    twice = make_spring()
    twice.set_applied_force(37)
    twice.set_applied_force(37)

    assert (twice.applied_force, twice.displacement, twice.spring_constant) == (
        once.applied_force, once.displacement, once.spring_constant
    )


def test_applied_force_boundary():
    spring = make_spring()
    spring.set_applied_force(100)
    assert spring.displacement == pytest.approx(100 / 200)

    with pytest.raises(RangeError):
        spring.set_applied_force(100 + 1e-9)
    assert spring.applied_force == 100.0
    assert spring.displacement == pytest.approx(0.5)


def test_rejected_setters_leave_spring_unchanged():
    spring = make_spring()
    spring.set_applied_force(20)
    before = (spring.applied_force, spring.spring_constant, spring.displacement)

    with pytest.raises(RangeError):
        spring.set_spring_constant(50)
    with pytest.raises(RangeError):
        spring.set_displacement(1.5)
    with pytest.raises(RangeError):
        spring.set_applied_force(float("nan"))

    assert (spring.applied_force, spring.spring_constant, spring.displacement) == before


def test_displacement_implying_excess_force_is_rejected():
    """x = 0.6 m is inside the sanity range, but k x = 120 N exceeds the force range."""
    spring = make_spring()
    assert spring.displacement_range.contains(0.6)

    with pytest.raises(RangeError) as info:
        spring.set_displacement(0.6)
    assert info.value.name == "spring.applied_force"
    assert spring.displacement == 0.0


def test_spring_constant_implying_excess_force_is_rejected():
    spring = make_spring(holds="displacement")
    spring.set_displacement(0.4)   # F = 80 N
    with pytest.raises(RangeError):
        spring.set_spring_constant(300)   # F would be 120 N
    assert spring.spring_constant == 200.0
    assert spring.applied_force == pytest.approx(80.0)


def test_min_max_displacement_follow_spring_constant():
    spring = make_spring()
    assert spring.get_min_displacement() == pytest.approx(-0.5)
    assert spring.get_max_displacement() == pytest.approx(0.5)

    spring.set_spring_constant(400)
    assert spring.get_min_displacement() == pytest.approx(-0.25)
    assert spring.get_max_displacement() == pytest.approx(0.25)


def test_drag_to_displacement_limits_for_every_stiffness():
    """k (F.max / k) can round past F.max; the force settles on the bound."""
    for k in range(100, 1001):
        spring = make_spring(spring_constant=k)

        spring.set_displacement(spring.get_max_displacement())
        assert spring.applied_force == pytest.approx(100.0)
        assert spring.applied_force_range.contains(spring.applied_force)
        assert check_spring(spring)

        spring.set_displacement(spring.get_min_displacement())
        assert spring.applied_force == pytest.approx(-100.0)
        assert spring.applied_force_range.contains(spring.applied_force)


def test_rounding_allowance_does_not_widen_ranges():
    spring = make_spring(spring_constant=151)
    with pytest.raises(RangeError):
        spring.set_displacement(spring.get_max_displacement() * (1 + 1e-6))
    assert spring.displacement == 0.0


def test_range_snap():
    r = Range(-100, 100)
    assert r.snap(100.00000000000001, 1e-9) == 100.0
    assert r.snap(-100.00000000000001, 1e-9) == -100.0
    assert r.snap(42.0, 1e-9) == 42.0
    assert r.snap(100.5, 1e-9) == 100.5


def test_one_notification_per_quantity():
    spring = make_spring()
    counts = {"F": 0, "x": 0, "length": 0}
    spring.applied_force_property.subscribe(lambda n, o: counts.__setitem__("F", counts["F"] + 1))
    spring.displacement_property.subscribe(lambda n, o: counts.__setitem__("x", counts["x"] + 1))
    spring.length_property.subscribe(lambda n, o: counts.__setitem__("length", counts["length"] + 1))

    spring.set_applied_force(10)

    assert counts == {"F": 1, "x": 1, "length": 1}


def test_listener_cannot_re_drive_spring():
    spring = make_spring()
    spring.displacement_property.subscribe(lambda new, old: spring.set_applied_force(10))
    with pytest.raises(RuntimeError):
        spring.set_applied_force(50)


def test_reset():
    spring = make_spring()
    spring.set_applied_force(60)
    spring.set_spring_constant(700)
    spring.set_displacement(-0.1)

    spring.reset()

    assert spring.spring_constant == 200.0
    assert spring.applied_force == 0.0
    assert spring.displacement == 0.0
    assert spring.length == spring.equilibrium_position


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(spring_constant=50),                          # k outside its range
        dict(spring_constant_range=(0, 500)),              # non-positive stiffness
        dict(spring_constant_range=(500, 100)),            # min > max
        dict(applied_force_range=(10, 20)),                # initial F = 0 not allowed
        dict(holds="length"),
        dict(equilibrium_position=float("inf")),
        dict(spring_constant="stiff"),
    ],
)
def test_invalid_configuration(kwargs):
    with pytest.raises(ConfigurationError):
        make_spring(**kwargs)


def test_unknown_quantity():
    spring = make_spring()
    with pytest.raises(ValueError):
        spring.set("length", 1.0)


def test_random_operations_keep_hookes_law():
    """F = k x after every accepted setter call."""
    rng = np.random.default_rng(2015)
    spring = make_spring()
    for _ in range(500):
        op = rng.integers(3)
        try:
            if op == 0:
                spring.set_applied_force(rng.uniform(-110, 110))
            elif op == 1:
                spring.set_spring_constant(rng.uniform(90, 1010))
            else:
                spring.set_displacement(rng.uniform(-1.1, 1.1))
        except RangeError:
            pass
        assert check_spring(spring)
        assert spring.applied_force_range.contains(spring.applied_force)
        assert spring.spring_constant_range.contains(spring.spring_constant)
