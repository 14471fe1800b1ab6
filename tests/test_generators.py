import numpy as np
import pytest

from sysgen import (
    ConfigurationError,
    DuplicateNameError,
    GeneratorRegistry,
    InvalidBoundsError,
    KindMismatchError,
    UnknownGeneratorError,
)


def test_from_entries_builds_all_kinds(gens):
    reg = GeneratorRegistry.from_entries(gens)

    assert len(reg) == 4
    assert reg.get("p_mass").bounds == ((0.1, 0.3),)
    assert reg.get("p_trans").bounds == ((-10.0, 10.0), (-10.0, 10.0))
    assert reg.get("p_vel").kind == "velocity"


@pytest.mark.parametrize("seed", range(50))
def test_samples_stay_within_bounds(gens, seed):
    reg = GeneratorRegistry.from_entries(gens)
    rng = np.random.default_rng(seed)

    m = reg.sample("p_mass", rng, "mass")
    x, y = reg.sample("p_trans", rng, "translation")
    dx, dy = reg.sample("p_vel", rng, "velocity")
    r = reg.sample("p_rot", rng, "rotation")

    assert 0.1 <= m <= 0.3
    assert -10.0 <= x <= 10.0 and -10.0 <= y <= 10.0
    assert -10.0 <= dx <= 10.0 and -10.0 <= dy <= 10.0
    assert 0.1 <= r <= 0.3


def test_pair_dimensions_use_their_own_ranges(rng):
    reg = GeneratorRegistry()
    reg.define("strip", "translation", ((0.0, 1.0), (100.0, 101.0)))

    for _ in range(20):
        x, y = reg.sample("strip", rng)
        assert 0.0 <= x <= 1.0
        assert 100.0 <= y <= 101.0


def test_degenerate_range_returns_exact_value(rng):
    reg = GeneratorRegistry()
    reg.define("fixed", "mass", (2.5, 2.5))

    assert reg.sample("fixed", rng) == 2.5


def test_same_seed_same_samples(gens):
    reg = GeneratorRegistry.from_entries(gens)
    a = [reg.sample("p_trans", np.random.default_rng(9)) for _ in range(3)]
    b = [reg.sample("p_trans", np.random.default_rng(9)) for _ in range(3)]
    assert a == b


def test_duplicate_name_rejected():
    reg = GeneratorRegistry()
    reg.define("g", "mass", (0.0, 1.0))
    with pytest.raises(DuplicateNameError):
        reg.define("g", "rotation", (0.0, 1.0))


def test_unknown_generator(rng):
    reg = GeneratorRegistry()
    with pytest.raises(UnknownGeneratorError):
        reg.sample("missing", rng)


def test_kind_mismatch(gens, rng):
    reg = GeneratorRegistry.from_entries(gens)
    with pytest.raises(KindMismatchError):
        reg.sample("p_vel", rng, "rotation")
    with pytest.raises(KindMismatchError):
        reg.check("p_mass", "translation")


def test_min_greater_than_max_rejected():
    with pytest.raises(InvalidBoundsError):
        GeneratorRegistry.from_entries([{"name": "bad", "type": "mass", "min": 2.0, "max": 1.0}])
    with pytest.raises(InvalidBoundsError):
        GeneratorRegistry.from_entries([{
            "name": "bad", "type": "velocity",
            "dx": {"min": 0.0, "max": 1.0}, "dy": {"min": 5.0, "max": -5.0},
        }])


@pytest.mark.parametrize("entry", [
    {"name": "g", "type": "spin", "min": 0.0, "max": 1.0},
    {"name": "g", "type": "mass", "min": 0.0},
    {"name": "g", "type": "translation", "x": {"min": 0.0, "max": 1.0}},
    {"type": "mass", "min": 0.0, "max": 1.0},
    {"name": "g", "type": "mass", "min": "low", "max": 1.0},
])
def test_malformed_entries(entry):
    with pytest.raises(ConfigurationError):
        GeneratorRegistry.from_entries([entry])


@pytest.mark.parametrize("kind, bounds", [
    ("mass", (1.0, 2.0, 3.0)),
    ("rotation", 1.0),
    ("translation", (0.0, 1.0)),
    ("velocity", ((0.0, 1.0),)),
    ("velocity", ((0.0, 1.0), (0.0, 1.0, 2.0))),
    ("mass", ("low", 1.0)),
])
def test_define_rejects_malformed_bounds(kind, bounds):
    reg = GeneratorRegistry()
    with pytest.raises(ConfigurationError):
        reg.define("g", kind, bounds)
    assert "g" not in reg
