# -*- coding: utf-8 -*-
"""
水汽扩散（七点均值核 + 反射边界）
--------------------------------
对每个非晶体元胞：
    d'(x) = 1/7 * [ d(x) + Σ_6 邻居 d(y) ]
若邻居 y 是晶体，则用 d(x) 自身的值代替 d(y)（反射：水汽不流入固相）。
晶体元胞 d' = 0。

整场从同一个快照计算，写入 lattice.vapor_scratch，最后交换缓冲。
其余字段不动。
"""

from __future__ import annotations
import numpy as np

from ..core.hexgrid import HEX_OFFSETS, neighbor

__all__ = ["KERNEL_WEIGHT", "diffuse"]

KERNEL_WEIGHT = 1.0 / 7.0


def diffuse(lattice, settings=None) -> None:
    d = lattice.diffusive_mass
    crystal = lattice.is_crystal
    acc = lattice.vapor_scratch

    np.copyto(acc, d)
    for di, dj in HEX_OFFSETS:
        acc += np.where(neighbor(crystal, di, dj), d, neighbor(d, di, dj))
    acc *= KERNEL_WEIGHT
    acc[crystal] = 0.0

    lattice.swap_vapor()
