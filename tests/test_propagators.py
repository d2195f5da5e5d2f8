import numpy as np
import pytest

from swarmulate import ConfigurationError, NumericalError, Particle, RandomStream
from swarmulate.propagators import InitUniform, UpdateEngine
from swarmulate.utils.benchmark_functions import booth, sphere


def make_particle(position, velocity, personal_best_position, fitness):
    """Create a particle with given state."""
    particle = Particle(len(position), index=0)
    particle.set_state(
        (np.array(position, dtype=float), np.array(velocity, dtype=float), np.array(personal_best_position, dtype=float), fitness)
    )
    return particle


@pytest.mark.mpi_skip
def test_init_uniform():
    """Test that initialization samples within bounds and scores the initial position."""
    init = InitUniform(booth, (-10.0, 10.0))
    stream = RandomStream(42, 0)
    for _ in range(100):
        particle = Particle(2)
        init(particle, stream)
        assert np.all(particle.position >= -10.0) and np.all(particle.position <= 10.0)
        assert np.all(np.abs(particle.velocity) <= 20.0)
        assert np.array_equal(particle.personal_best_position, particle.position)
        assert particle.personal_best_position is not particle.position
        assert particle.fitness == booth(particle.position)


@pytest.mark.mpi_skip
def test_init_draw_order():
    """Test that positions are drawn before velocities from the worker's stream."""
    init = InitUniform(sphere, (0.0, 1.0))
    particle = Particle(3)
    init(particle, RandomStream(7, 2))
    twin = RandomStream(7, 2)
    expected_position = [twin.uniform(0.0, 1.0) for _ in range(3)]
    expected_velocity = [twin.uniform(-1.0, 1.0) for _ in range(3)]
    assert particle.position.tolist() == expected_position
    assert particle.velocity.tolist() == expected_velocity


@pytest.mark.mpi_skip
def test_invalid_limits():
    """Test that an empty search domain is rejected."""
    with pytest.raises(ConfigurationError):
        UpdateEngine(sphere, (1.0, 1.0))


@pytest.mark.mpi_skip
def test_update_rule():
    """Test the velocity update against a hand-computed step."""
    engine = UpdateEngine(sphere, (-10.0, 10.0), inertia=0.79, c_cognitive=1.49, c_social=1.49)
    particle = make_particle([1.0], [0.5], [2.0], 4.0)
    engine(particle, RandomStream(3, 0), np.array([-1.0]))

    twin = RandomStream(3, 0)
    r1, r2 = twin.random(), twin.random()
    velocity = 0.79 * 0.5 + 1.49 * r1 * (2.0 - 1.0) + 1.49 * r2 * (-1.0 - 1.0)
    assert particle.velocity[0] == pytest.approx(velocity)
    assert particle.position[0] == pytest.approx(1.0 + velocity)


@pytest.mark.mpi_skip
def test_velocity_resampling():
    """Test that a velocity out of bounds is replaced by a fresh sample, not clipped."""
    engine = UpdateEngine(sphere, (0.0, 1.0), inertia=2.0)
    # Personal and global best coincide with the position, so the new velocity is 2 * 1.0 = 2.0 > v_max.
    particle = make_particle([0.5], [1.0], [0.5], 0.25)
    engine(particle, RandomStream(11, 0), np.array([0.5]))

    twin = RandomStream(11, 0)
    twin.random(), twin.random()
    expected = twin.uniform(-1.0, 1.0)
    assert particle.velocity[0] == expected
    assert -1.0 <= particle.velocity[0] <= 1.0
    assert particle.position[0] == min(max(0.5 + expected, 0.0), 1.0)


@pytest.mark.mpi_skip
def test_position_clipping():
    """Test that positions are clipped to the search domain while the velocity is kept."""
    engine = UpdateEngine(sphere, (0.0, 1.0), inertia=1.0)
    particle = make_particle([0.9], [0.5], [0.9], 0.81)
    engine(particle, RandomStream(0, 0), np.array([0.9]))
    assert particle.velocity[0] == 0.5
    assert particle.position[0] == 1.0

    particle = make_particle([0.1], [-0.5], [0.1], 0.01)
    engine(particle, RandomStream(0, 0), np.array([0.1]))
    assert particle.velocity[0] == -0.5
    assert particle.position[0] == 0.0


@pytest.mark.mpi_skip
def test_personal_best_strictly_better():
    """Test that only strictly better fitness values replace the personal best."""
    engine = UpdateEngine(lambda x: 0.0, (-1.0, 1.0))
    particle = make_particle([0.0, 0.0], [0.3, -0.2], [0.0, 0.0], 0.0)
    engine(particle, RandomStream(5, 0), np.zeros(2))
    assert not np.array_equal(particle.position, particle.personal_best_position)
    assert np.array_equal(particle.personal_best_position, [0.0, 0.0])
    assert particle.fitness == 0.0

    engine = UpdateEngine(sphere, (-1.0, 1.0), inertia=1.0, c_cognitive=0.0, c_social=0.0)
    particle = make_particle([0.5, 0.5], [-0.25, -0.25], [0.5, 0.5], 0.5)
    engine(particle, RandomStream(5, 0), np.zeros(2))
    assert np.array_equal(particle.personal_best_position, [0.25, 0.25])
    assert particle.personal_best_position is not particle.position
    assert particle.fitness == pytest.approx(0.125)


@pytest.mark.mpi_skip
def test_bounds_and_monotonicity():
    """Test bound invariants and fitness monotonicity over many random steps."""
    engine = UpdateEngine(booth, (-10.0, 10.0))
    init = InitUniform(booth, (-10.0, 10.0))
    stream = RandomStream(1, 0)
    particle = Particle(2)
    init(particle, stream)
    global_best = np.array([1.0, 3.0])
    for _ in range(200):
        fitness = particle.fitness
        engine(particle, stream, global_best)
        assert np.all(particle.position >= -10.0) and np.all(particle.position <= 10.0)
        assert np.all(np.abs(particle.velocity) <= 20.0)
        assert particle.fitness <= fitness
        assert particle.fitness == booth(particle.personal_best_position)


@pytest.mark.mpi_skip
def test_non_finite_fitness():
    """Test that non-finite objective values are rejected."""
    engine = UpdateEngine(lambda x: np.nan, (-1.0, 1.0))
    particle = make_particle([0.0], [0.1], [0.0], 1.0)
    with pytest.raises(NumericalError) as e:
        engine(particle, RandomStream(0, 0), np.zeros(1))
    assert e.value.index == 0

    init = InitUniform(lambda x: np.inf, (-1.0, 1.0))
    with pytest.raises(NumericalError):
        init(Particle(1), RandomStream(0, 0))
