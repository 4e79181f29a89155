import numpy as np
import pytest

from snowsim_gg import GrowthEngine, InvalidConfiguration, NegativeMassUnderflow, Settings
from snowsim_gg.core.lattice import crystal_count, total_mass

FIELDS = ("is_crystal", "is_boundary", "diffusive_mass", "boundary_mass", "crystal_mass")


def _assert_same(a, b):
    for name in FIELDS:
        np.testing.assert_array_equal(getattr(a, name), getattr(b, name), err_msg=name)


def test_construct_and_reset():
    eng = GrowthEngine(Settings(grid_size=20, rho=0.5))
    f = eng.field
    assert f.grid_size == 20 and f.step == 0
    assert f.is_crystal.shape == (20, 20)
    eng.run(5)
    assert eng.step == 5
    f = eng.reset()
    assert f.step == 0 and crystal_count(f) == 1


def test_invalid_grid_size():
    with pytest.raises(InvalidConfiguration):
        GrowthEngine(Settings(grid_size=0))
    eng = GrowthEngine(Settings(grid_size=8))
    with pytest.raises(InvalidConfiguration):
        eng.resize(-1)
    assert eng.grid_size == 8


def test_determinism_and_inert_sigma():
    a = GrowthEngine(Settings(grid_size=32))
    b = GrowthEngine(Settings(grid_size=32))
    c = GrowthEngine(Settings(grid_size=32, sigma=0.5))
    for eng in (a, b, c):
        eng.run(40)
    _assert_same(a.field, b.field)
    _assert_same(a.field, c.field)


def test_crystal_grows_and_sets_are_monotone():
    eng = GrowthEngine(Settings(grid_size=40))
    prev_c = eng.field.is_crystal.copy()
    prev_b = eng.field.is_boundary.copy()
    for _ in range(60):
        f = eng.advance()
        assert not np.any(prev_c & ~f.is_crystal)
        assert not np.any(prev_b & ~f.is_boundary)
        prev_c, prev_b = f.is_crystal.copy(), f.is_boundary.copy()
    assert crystal_count(eng.field) > 1


def test_total_mass_is_conserved():
    eng = GrowthEngine(Settings(grid_size=24, rho=0.6))
    m0 = total_mass(eng.field)
    assert m0 == pytest.approx(0.6 * (24 * 24 - 1) + 1.0)
    eng.run(30)
    assert total_mass(eng.field) == pytest.approx(m0, rel=1e-9)


def test_masses_stay_nonnegative_and_crystals_dry():
    eng = GrowthEngine(Settings(grid_size=24))
    f = eng.run(30)
    for name in ("diffusive_mass", "boundary_mass", "crystal_mass"):
        assert np.all(getattr(f, name) >= 0.0), name
    assert np.all(f.diffusive_mass[f.is_crystal] == 0.0)


def test_field_is_read_only():
    eng = GrowthEngine(Settings(grid_size=8))
    f = eng.get_field()
    with pytest.raises(ValueError):
        f.diffusive_mass[0, 0] = 1.0
    with pytest.raises(ValueError):
        f.is_crystal[0, 0] = True


def test_rate_change_keeps_state():
    eng = GrowthEngine(Settings(grid_size=16))
    eng.run(3)
    before = eng.field
    snap = {name: getattr(before, name).copy() for name in FIELDS}

    eng.set_param("beta", 2.5)
    eng.update(mu=0.02, kappa=0.01)

    assert eng.step == 3
    assert eng.settings.beta == 2.5 and eng.settings.mu == 0.02
    for name in FIELDS:
        np.testing.assert_array_equal(getattr(eng.field, name), snap[name])


def test_grid_size_change_rebuilds():
    eng = GrowthEngine(Settings(grid_size=16))
    eng.run(3)
    eng.set_param("grid_size", 24)
    assert eng.grid_size == 24 and eng.step == 0
    assert eng.field.is_crystal[12, 12]
    eng.update(grid_size=10, rho=0.2)
    assert eng.grid_size == 10
    assert eng.field.diffusive_mass[0, 0] == 0.2


def test_unknown_param():
    eng = GrowthEngine(Settings(grid_size=8))
    with pytest.raises(InvalidConfiguration):
        eng.set_param("noise", 1.0)
    with pytest.raises(InvalidConfiguration):
        eng.update(beta=1.0, bogus=2.0)
    assert eng.settings.beta == Settings().beta


def test_settings_are_copied():
    s = Settings(grid_size=8)
    eng = GrowthEngine(s)
    s.beta = 99.0
    eng.settings.beta = 77.0
    assert eng.settings.beta == Settings().beta


def test_apply_preset():
    eng = GrowthEngine(Settings(grid_size=8))
    eng.apply_preset("Simple Star", grid_size=32)
    assert eng.grid_size == 32
    assert eng.settings.kappa == 0.15
    eng.run(60)
    assert crystal_count(eng.field) > 1


def test_strict_mode_leaves_no_partial_tick():
    eng = GrowthEngine(Settings(grid_size=16, gamma=5.0, kappa=0.5), strict_mass=True)
    before = {name: getattr(eng.field, name).copy() for name in FIELDS}
    with pytest.raises(NegativeMassUnderflow):
        eng.advance()
    assert eng.step == 0
    for name in FIELDS:
        np.testing.assert_array_equal(getattr(eng.field, name), before[name])


def test_update_with_bad_grid_size_changes_nothing():
    eng = GrowthEngine(Settings(grid_size=16))
    eng.run(2)
    with pytest.raises(InvalidConfiguration):
        eng.update(beta=2.0, grid_size=0)
    with pytest.raises(InvalidConfiguration):
        eng.update(mu=0.5, kappa="lots")
    assert eng.settings.beta == Settings().beta
    assert eng.settings.mu == Settings().mu
    assert eng.grid_size == 16 and eng.step == 2


def test_integral_float_grid_size_in_setters():
    eng = GrowthEngine(Settings(grid_size=8))
    eng.resize(24.0)
    assert eng.grid_size == 24 and isinstance(eng.settings.grid_size, int)
    eng.set_param("grid_size", 12.0)
    eng.update(grid_size=10.0)
    assert eng.grid_size == 10
    with pytest.raises(InvalidConfiguration):
        eng.resize(12.5)
