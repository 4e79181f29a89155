# -*- coding: utf-8 -*-
"""
冻结：边界元胞的水汽按 kappa 拆分
    crystal_mass  += kappa * d
    boundary_mass += (1 - kappa) * d
    d = 0
晶体元胞的水汽强制为 0；非边界的非晶体元胞不受影响。
"""
from __future__ import annotations

from .guards import guard_masses

__all__ = ["freeze"]


def freeze(lattice, settings, *, strict: bool = False) -> None:
    kappa = float(settings.kappa)
    crystal = lattice.is_crystal
    d = lattice.diffusive_mass

    d[crystal] = 0.0

    m = lattice.is_boundary & ~crystal
    dm = d[m]
    lattice.crystal_mass[m] += kappa * dm
    lattice.boundary_mass[m] += (1.0 - kappa) * dm
    d[m] = 0.0

    guard_masses(lattice, strict=strict)
