# -*- coding: utf-8 -*-
"""
attachment.py — 附着（边界元胞转为永久晶体）
------------------------------------------
流程：
  1) 取过程开始时 is_crystal / is_boundary 的快照，所有判定只读快照（同时判定，与遍历顺序无关）
  2) 对每个非晶体元胞，统计快照中晶体邻居数 n；n == 0 跳过
  3) 阈值阶梯：
       n ∈ {1, 2} : boundary_mass >= beta
       n == 3     : boundary_mass >= 1.0（饱和）
                    或 邻域水汽 < theta 且 boundary_mass >= alpha（刀刃失稳）
       n >= 4     : 总是附着
     邻域水汽 = 自身 d + 非晶体邻居的 d（晶体邻居不计）
  4) 附着：crystal_mass += boundary_mass；boundary_mass = 0；is_crystal = True
     其非晶体邻居（按快照）加入边界集合
  5) 新标志整体提交
"""

from __future__ import annotations
import numpy as np

from ..core.hexgrid import HEX_OFFSETS, neighbor, any_neighbor

__all__ = ["attach", "attach_mask"]


def attach_mask(lattice, settings) -> np.ndarray:
    """只做判定，不修改 lattice；返回本步将要附着的元胞掩码。"""
    crystal = lattice.is_crystal
    d = lattice.diffusive_mass
    bm = lattice.boundary_mass

    n_att = np.zeros(crystal.shape, dtype=np.int8)
    vapor = d.copy()
    for di, dj in HEX_OFFSETS:
        nb_crystal = neighbor(crystal, di, dj)
        n_att += nb_crystal
        vapor += np.where(nb_crystal, 0.0, neighbor(d, di, dj))

    candidate = ~crystal & (n_att > 0)

    tips = ((n_att == 1) | (n_att == 2)) & (bm >= settings.beta)
    knife_edge = (vapor < settings.theta) & (bm >= settings.alpha)
    concave = (n_att == 3) & ((bm >= 1.0) | knife_edge)
    pocket = n_att >= 4

    return candidate & (tips | concave | pocket)


def attach(lattice, settings) -> int:
    """执行附着，返回新增晶体元胞数。"""
    crystal_snap = lattice.is_crystal.copy()
    boundary_next = lattice.is_boundary.copy()

    new = attach_mask(lattice, settings)
    n_new = int(np.count_nonzero(new))
    if n_new == 0:
        return 0

    # 准液层整体并入固相
    lattice.crystal_mass[new] += lattice.boundary_mass[new]
    lattice.boundary_mass[new] = 0.0

    crystal_next = crystal_snap | new
    boundary_next |= any_neighbor(new) & ~crystal_snap

    lattice.commit_flags(crystal_next, boundary_next)
    return n_new
