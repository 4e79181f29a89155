# -*- coding: utf-8 -*-
"""
融化：边界且未结晶的元胞，把部分准液层与固相质量退回水汽
    mb = mu * boundary_mass
    mc = gamma * crystal_mass
    boundary_mass -= mb;  crystal_mass -= mc;  diffusive_mass += mb + mc
晶体元胞与非边界元胞不受影响。本过程质量守恒。
"""
from __future__ import annotations

from .guards import guard_masses

__all__ = ["melt"]


def melt(lattice, settings, *, strict: bool = False) -> None:
    m = lattice.is_boundary & ~lattice.is_crystal

    melted_b = float(settings.mu) * lattice.boundary_mass[m]
    melted_c = float(settings.gamma) * lattice.crystal_mass[m]

    lattice.boundary_mass[m] -= melted_b
    lattice.crystal_mass[m] -= melted_c
    lattice.diffusive_mass[m] += melted_b + melted_c

    guard_masses(lattice, strict=strict)
