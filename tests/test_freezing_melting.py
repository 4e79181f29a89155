import numpy as np
import pytest

from snowsim_gg.core.errors import NegativeMassUnderflow
from snowsim_gg.core.lattice import create_lattice
from snowsim_gg.core.settings import Settings
from snowsim_gg.growth.freezing import freeze
from snowsim_gg.growth.melting import melt


def _mk(**kw):
    s = Settings(grid_size=16, **kw)
    return create_lattice(s), s


def test_freezing_split():
    lat, s = _mk(rho=0.5, kappa=0.25)
    freeze(lat, s)

    assert lat.crystal_mass[7, 7] == pytest.approx(0.125)
    assert lat.boundary_mass[7, 7] == pytest.approx(0.375)
    assert lat.diffusive_mass[7, 7] == 0.0

    # 非边界元胞不受影响
    assert lat.diffusive_mass[0, 0] == 0.5
    assert lat.crystal_mass[0, 0] == 0.0
    assert lat.boundary_mass[0, 0] == 0.0

    # 晶核本身只被清零水汽
    assert lat.crystal_mass[8, 8] == 1.0


def test_freezing_accumulates():
    lat, s = _mk(rho=0.5, kappa=0.5)
    lat.boundary_mass[9, 9] = 1.0
    lat.crystal_mass[9, 9] = 0.25
    freeze(lat, s)
    assert lat.boundary_mass[9, 9] == pytest.approx(1.25)
    assert lat.crystal_mass[9, 9] == pytest.approx(0.5)


def test_melting_returns_mass_to_vapor():
    lat, s = _mk(rho=0.0, mu=0.25, gamma=0.5)
    lat.boundary_mass[7, 7] = 0.4
    lat.crystal_mass[7, 7] = 0.2
    lat.diffusive_mass[7, 7] = 0.1
    before = lat.boundary_mass[7, 7] + lat.crystal_mass[7, 7] + lat.diffusive_mass[7, 7]

    melt(lat, s)

    assert lat.boundary_mass[7, 7] == pytest.approx(0.3)
    assert lat.crystal_mass[7, 7] == pytest.approx(0.1)
    assert lat.diffusive_mass[7, 7] == pytest.approx(0.1 + 0.1 + 0.1)
    after = lat.boundary_mass[7, 7] + lat.crystal_mass[7, 7] + lat.diffusive_mass[7, 7]
    assert after == pytest.approx(before)


def test_melting_skips_crystal_and_interior_cells():
    lat, s = _mk(rho=0.0, mu=0.5, gamma=0.5)
    lat.boundary_mass[0, 0] = 1.0  # 非边界
    melt(lat, s)
    assert lat.crystal_mass[8, 8] == 1.0
    assert lat.diffusive_mass[8, 8] == 0.0
    assert lat.boundary_mass[0, 0] == 1.0
    assert lat.diffusive_mass[0, 0] == 0.0


def test_aggressive_melting_is_clamped():
    lat, s = _mk(rho=0.0, mu=0.0, gamma=1.5)
    lat.crystal_mass[7, 7] = 0.2
    melt(lat, s)
    assert lat.crystal_mass[7, 7] == 0.0
    assert np.all(lat.crystal_mass >= 0.0)


def test_aggressive_melting_strict_raises():
    lat, s = _mk(rho=0.0, mu=0.0, gamma=1.5)
    lat.crystal_mass[7, 7] = 0.2
    with pytest.raises(NegativeMassUnderflow) as info:
        melt(lat, s, strict=True)
    assert info.value.field == "crystal_mass"
    assert info.value.count == 1
