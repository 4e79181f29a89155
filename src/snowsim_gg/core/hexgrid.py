# -*- coding: utf-8 -*-
"""
hexgrid.py — 六角晶格邻接（环面周期）
------------------------------------
六角格用“轴向坐标”存进方形数组：元胞 (i, j) 的 6 个邻居偏移为
  (-1,-1) (-1,0) (0,-1) (0,1) (1,0) (1,1)
所有下标对 N 取模（环面）。环面只是无限平面的近似，晶体接近网格边缘后结果失真。

提供:
  neighbor(arr, di, dj)      -> arr[(i+di)%N, (j+dj)%N] 的整场数组
  any_neighbor(mask)         -> 是否存在为 True 的邻居
  hex_distance(di, dj)       -> 轴向坐标下的六角距离
"""

from __future__ import annotations
from typing import Tuple
import numpy as np

__all__ = [
    "HEX_OFFSETS",
    "neighbor",
    "any_neighbor",
    "hex_distance",
]

HEX_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (0, -1),
    (0, 1),
    (1, 0),
    (1, 1),
)


def neighbor(arr: np.ndarray, di: int, dj: int) -> np.ndarray:
    """返回新数组 out，满足 out[i, j] = arr[(i+di)%N, (j+dj)%N]。"""
    # np.roll(a, s)[i] = a[i - s]，所以这里取负号
    return np.roll(arr, (-di, -dj), axis=(0, 1))


def any_neighbor(mask: np.ndarray) -> np.ndarray:
    """out[x] = True 当且仅当 x 的某个邻居在 mask 中为 True。"""
    out = np.zeros(mask.shape, dtype=bool)
    for di, dj in HEX_OFFSETS:
        out |= neighbor(mask, di, dj)
    return out


def hex_distance(di, dj):
    """轴向坐标的六角距离；支持标量或 ndarray。"""
    return np.maximum(np.maximum(np.abs(di), np.abs(dj)), np.abs(di - dj))
