import pytest
from hookes_law import SingleSpringSystem, Spring, ConfigurationError, RangeError
from hookes_law.model import IntroductionModel, SystemsModel, EnergyModel
from hookes_law.core.invariants import check_system


def test_spring_is_its_own_equivalent():
    system = SingleSpringSystem(spring_constant=200)
    assert system.equivalent_spring is system.spring
    assert system.springs == (system.spring,)
    assert system.all_springs() == (system.spring,)
    assert system.spring.owner is system


def test_system_contract():
    system = SingleSpringSystem(spring_constant=200, applied_force_range=(-100, 100))
    assert system.applied_force_range.to_list() == [-100.0, 100.0]
    assert system.spring_constant_range.to_list() == [100.0, 1000.0]

    system.set_applied_force(50)
    assert system.spring.displacement == pytest.approx(0.25)
    system.set_displacement(-0.1)
    assert system.spring.applied_force == pytest.approx(-20.0)
    assert check_system(system)


def test_wraps_existing_spring():
    spring = Spring(spring_constant=300)
    system = SingleSpringSystem(spring)
    spring.set_applied_force(30)
    assert system.equivalent_spring.displacement == pytest.approx(0.1)


def test_spring_or_options_not_both():
    with pytest.raises(ConfigurationError):
        SingleSpringSystem(Spring(), spring_constant=300)


def test_reset():
    system = SingleSpringSystem()
    system.set_applied_force(40)
    system.spring.set_spring_constant(800)
    system.spring.reset()
    assert system.spring.spring_constant == 200.0
    assert system.spring.applied_force == 0.0
    assert system.spring.displacement == 0.0


def test_introduction_model():
    model = IntroductionModel()
    assert model.number_of_systems == 1
    assert model.spring1 is not model.spring2

    model.set_number_of_systems(2)
    model.spring1.set_applied_force(50)
    assert model.spring2.applied_force == 0.0
    with pytest.raises(RangeError):
        model.set_number_of_systems(3)

    model.reset()
    assert model.number_of_systems == 1
    assert model.spring1.applied_force == 0.0


def test_systems_model_reset():
    model = SystemsModel()
    model.series_system.set_applied_force(50)
    model.parallel_system.set_displacement(0.25)

    model.reset()

    assert model.series_system.equivalent_spring.displacement == 0.0
    assert model.parallel_system.equivalent_spring.applied_force == 0.0


def test_energy_model_holds_displacement():
    """E = 1/2 k x^2 grows with k because x is held when k changes."""
    model = EnergyModel()
    spring = model.spring
    assert spring.spring_constant == 100.0
    assert spring.displacement_range.to_list() == [-1.0, 1.0]

    spring.set_displacement(1.0)
    assert spring.potential_energy == pytest.approx(50.0)

    spring.set_spring_constant(400)
    assert spring.displacement == 1.0
    assert spring.applied_force == pytest.approx(400.0)
    assert spring.potential_energy == pytest.approx(200.0)

    model.reset()
    assert spring.potential_energy == 0.0
    assert spring.spring_constant == 100.0


def test_single_system_live_bounds():
    """At k = 100 N/m the energy spring's 1 m travel caps the force at 100 N."""
    system = EnergyModel().system
    assert system.get_max_applied_force() == pytest.approx(100.0)
    assert system.get_min_displacement() == -1.0

    with pytest.raises(RangeError):
        system.set_applied_force(system.applied_force_range.max)
    system.set_applied_force(system.get_max_applied_force())
    assert system.spring.displacement == pytest.approx(1.0)

    system.spring.set_spring_constant(400)
    assert system.get_max_applied_force() == pytest.approx(400.0)
    system.set_displacement(system.get_min_displacement())
    assert system.spring.applied_force == pytest.approx(-400.0)
    assert check_system(system)
