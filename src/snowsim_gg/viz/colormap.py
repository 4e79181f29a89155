# -*- coding: utf-8 -*-
"""
colormap.py — 晶体/水汽着色
---------------------------
LUT：256 级，两段 smoothstep 渐变
  t ∈ [0, 0.5]  水汽背景：深蓝 → 灰蓝
  t ∈ (0.5, 1]  晶体：青蓝 → 白
映射：
  晶体元胞  v =  sqrt(c / maxC)
  其它元胞  v = -(d / maxD) ** 1.5
  t = clip((v + 1) / 2, 0, 1)
归一化用整场最大晶体质量与最大水汽质量（由调用方决定显示尺度，引擎不关心）。
"""

from __future__ import annotations
from typing import Optional
import numpy as np

__all__ = ["LUT_SIZE", "build_lut", "colorize"]

LUT_SIZE = 256

_LUT: Optional[np.ndarray] = None


def _smoothstep(t: np.ndarray) -> np.ndarray:
    return t * t * (3.0 - 2.0 * t)


def _lerp(a, b, t):
    return a + t * (b - a)


def build_lut(size: int = LUT_SIZE) -> np.ndarray:
    """返回 (size, 3) uint8 颜色表。"""
    t = np.arange(size, dtype=float) / (size - 1)
    lo = t <= 0.5
    local = np.where(lo, _smoothstep(t / 0.5), _smoothstep((t - 0.5) / 0.5))

    vapor_a, vapor_b = np.array([0.05, 0.08, 0.15]), np.array([0.25, 0.35, 0.50])
    ice_a, ice_b = np.array([0.20, 0.50, 0.70]), np.array([1.00, 1.00, 1.00])

    rgb = np.where(
        lo[:, None],
        _lerp(vapor_a, vapor_b, local[:, None]),
        _lerp(ice_a, ice_b, local[:, None]),
    )
    return np.clip(rgb * 255.0, 0.0, 255.0).astype(np.uint8)


def _lut() -> np.ndarray:
    global _LUT
    if _LUT is None:
        _LUT = build_lut()
    return _LUT


def colorize(field) -> np.ndarray:
    """
    参数
    ----
    field : 具有 is_crystal / crystal_mass / diffusive_mass 的对象（FieldView 或 LatticeState）

    返回
    ----
    rgb : (N, N, 3) uint8
    """
    crystal = np.asarray(field.is_crystal)
    c = np.asarray(field.crystal_mass, dtype=float)
    d = np.asarray(field.diffusive_mass, dtype=float)

    max_c = float(c.max()) if c.size else 0.0
    max_d = float(d.max()) if d.size else 0.0

    v = np.zeros(c.shape, dtype=float)
    if max_c > 0.0:
        v = np.where(crystal, np.sqrt(np.clip(c / max_c, 0.0, None)), v)
    if max_d > 0.0:
        v = np.where(~crystal, -np.power(np.clip(d / max_d, 0.0, None), 1.5), v)

    t = np.clip((v + 1.0) * 0.5, 0.0, 1.0)
    idx = (t * (LUT_SIZE - 1)).astype(np.intp)
    return _lut()[idx]
