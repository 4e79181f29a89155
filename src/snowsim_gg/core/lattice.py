# -*- coding: utf-8 -*-
"""
晶格状态（LatticeState）
========================

【字段】全部为 (N, N) 数组，行优先，按 [row, col] 索引
- is_crystal     : bool     是否已结晶（一旦为 True 永不回退）
- is_boundary    : bool     是否为边界元胞（只增不减）
- diffusive_mass : float64  水汽质量（晶体元胞恒为 0）
- boundary_mass  : float64  准液层质量（仅在边界且未结晶时有意义）
- crystal_mass   : float64  固相质量

【双缓冲约定】
- 扩散过程写入 vapor_scratch，结束后 swap_vapor() 交换
- 附着过程基于过程开始时的标志快照判断，结束后 commit_flags() 一次性提交
两者保证“同一过程内所有读取都看到过程开始前的状态”。

【对外只读】
view() 返回 FieldView，其中数组为不可写视图；视图只在下一次推进前有效。
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np

from .hexgrid import HEX_OFFSETS, hex_distance
from .settings import Settings

__all__ = [
    "LatticeState",
    "FieldView",
    "create_lattice",
    "seed_center",
    "total_mass",
    "crystal_count",
    "crystal_extent",
]


@dataclass(frozen=True)
class FieldView:
    """推进之间交给渲染/界面层的只读视图。"""

    is_crystal: np.ndarray
    is_boundary: np.ndarray
    diffusive_mass: np.ndarray
    boundary_mass: np.ndarray
    crystal_mass: np.ndarray
    grid_size: int
    step: int = 0


@dataclass
class LatticeState:
    is_crystal: np.ndarray
    is_boundary: np.ndarray
    diffusive_mass: np.ndarray
    boundary_mass: np.ndarray
    crystal_mass: np.ndarray
    vapor_scratch: np.ndarray  # 扩散的写缓冲

    grid_size: int

    @property
    def shape(self) -> Tuple[int, int]:
        return self.is_crystal.shape

    @property
    def center(self) -> Tuple[int, int]:
        c = self.grid_size // 2
        return c, c

    # —— 双缓冲提交 —— #
    def swap_vapor(self) -> None:
        self.diffusive_mass, self.vapor_scratch = self.vapor_scratch, self.diffusive_mass

    def commit_flags(self, is_crystal: np.ndarray, is_boundary: np.ndarray) -> None:
        self.is_crystal = is_crystal
        self.is_boundary = is_boundary

    def copy(self) -> "LatticeState":
        return LatticeState(
            is_crystal=self.is_crystal.copy(),
            is_boundary=self.is_boundary.copy(),
            diffusive_mass=self.diffusive_mass.copy(),
            boundary_mass=self.boundary_mass.copy(),
            crystal_mass=self.crystal_mass.copy(),
            vapor_scratch=np.zeros_like(self.vapor_scratch),
            grid_size=self.grid_size,
        )

    def view(self, step: int = 0) -> FieldView:
        return FieldView(
            is_crystal=_readonly(self.is_crystal),
            is_boundary=_readonly(self.is_boundary),
            diffusive_mass=_readonly(self.diffusive_mass),
            boundary_mass=_readonly(self.boundary_mass),
            crystal_mass=_readonly(self.crystal_mass),
            grid_size=self.grid_size,
            step=step,
        )


def _readonly(arr: np.ndarray) -> np.ndarray:
    v = arr.view()
    v.flags.writeable = False
    return v


# —— 工具：统一分配 (N,N) 数组 ——
def _alloc(n: int, *, dtype, fill=0.0) -> np.ndarray:
    return np.full((n, n), fill_value=fill, dtype=dtype)


def create_lattice(settings: Settings) -> LatticeState:
    """按 settings 分配全部场并放置中心晶核。"""
    settings.validate()
    n = int(settings.grid_size)

    lattice = LatticeState(
        is_crystal=_alloc(n, dtype=bool, fill=False),
        is_boundary=_alloc(n, dtype=bool, fill=False),
        diffusive_mass=_alloc(n, dtype=np.float64, fill=float(settings.rho)),
        boundary_mass=_alloc(n, dtype=np.float64, fill=0.0),
        crystal_mass=_alloc(n, dtype=np.float64, fill=0.0),
        vapor_scratch=_alloc(n, dtype=np.float64, fill=0.0),
        grid_size=n,
    )
    seed_center(lattice)
    return lattice


def seed_center(lattice: LatticeState) -> None:
    """
    在几何中心放置唯一的晶核：
      is_crystal=True, crystal_mass=1.0, diffusive_mass=0
    并把它的 6 个邻居标为边界。
    """
    n = lattice.grid_size
    ci, cj = lattice.center
    lattice.is_crystal[ci, cj] = True
    lattice.crystal_mass[ci, cj] = 1.0
    lattice.diffusive_mass[ci, cj] = 0.0
    for di, dj in HEX_OFFSETS:
        lattice.is_boundary[(ci + di) % n, (cj + dj) % n] = True


# —— 诊断量 —— #
def total_mass(lattice) -> float:
    """三类质量之和；四个过程都守恒，可用来监测数值漂移。"""
    return float(
        np.sum(lattice.diffusive_mass)
        + np.sum(lattice.boundary_mass)
        + np.sum(lattice.crystal_mass)
    )


def crystal_count(lattice) -> int:
    return int(np.count_nonzero(lattice.is_crystal))


def crystal_extent(lattice) -> int:
    """晶体元胞到中心晶核的最大六角距离（不考虑环面回绕）。"""
    rows, cols = np.nonzero(lattice.is_crystal)
    if rows.size == 0:
        return 0
    c = lattice.grid_size // 2
    return int(np.max(hex_distance(rows - c, cols - c)))
