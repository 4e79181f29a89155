# -*- coding: utf-8 -*-
"""
render.py — 六角晶格 → 像素图
----------------------------
像素到六角元胞的映射只依赖 (grid_size, size, scale)，首次构造时建好并缓存，
之后每帧只做一次花式索引。

几何约定
- 行间距 v = size / grid_size * sqrt(3)/2 * scale，列间距 h = 2/sqrt(3) * v
- 元胞 (r, c) 中心：x = m_w + (c - m_g - (r - m_g)/2) * h，y = m_w + (r - m_g) * v
  其中 m_g = grid_size // 2（晶核所在），m_w = size // 2（画面中心）
- 每个像素在四个候选中心 (floor(r), floor(c)) + {0,1}² 里取最近者
- 落在晶格外的像素统一映射到 (0, 0)
"""

from __future__ import annotations
from pathlib import Path
from typing import Tuple
import numpy as np
import matplotlib.pyplot as plt

from .colormap import colorize

__all__ = ["HexRaster", "save_frame"]

_SQRT3 = np.sqrt(3.0)


class HexRaster:
    def __init__(self, grid_size: int, size: int = 600, scale: float = 1.0):
        if grid_size <= 0 or size <= 0:
            raise ValueError("grid_size 与 size 必须为正")
        self.grid_size = int(grid_size)
        self.size = int(size)
        self.scale = float(scale)
        self.rows, self.cols = self._build_map()

    @property
    def v_dist(self) -> float:
        return self.size / self.grid_size * _SQRT3 / 2.0 * self.scale

    @property
    def h_dist(self) -> float:
        return 2.0 / _SQRT3 * self.v_dist

    def _build_map(self) -> Tuple[np.ndarray, np.ndarray]:
        n, w = self.grid_size, self.size
        mg, mw = n // 2, w // 2
        vd, hd = self.v_dist, self.h_dist

        y, x = np.mgrid[0:w, 0:w].astype(float)
        row_f = mg + (y - mw) / vd
        col_f = mg + (x - mw) / hd + (row_f - mg) * 0.5
        r0 = np.floor(row_f).astype(np.intp)
        c0 = np.floor(col_f).astype(np.intp)

        best_d = np.full((w, w), np.inf)
        rows = np.zeros((w, w), dtype=np.intp)
        cols = np.zeros((w, w), dtype=np.intp)
        for dr in (0, 1):
            for dc in (0, 1):
                r, c = r0 + dr, c0 + dc
                hx = mw + (c - mg - (r - mg) * 0.5) * hd
                hy = mw + (r - mg) * vd
                dist = (x - hx) ** 2 + (y - hy) ** 2
                closer = dist < best_d
                best_d = np.where(closer, dist, best_d)
                rows = np.where(closer, r, rows)
                cols = np.where(closer, c, cols)

        outside = (rows < 0) | (rows >= n) | (cols < 0) | (cols >= n)
        rows[outside] = 0
        cols[outside] = 0
        return rows, cols

    def render(self, field) -> np.ndarray:
        """返回 (size, size, 3) uint8 图像。"""
        if field.grid_size != self.grid_size:
            raise ValueError(
                f"grid_size 不一致：raster={self.grid_size}, field={field.grid_size}"
            )
        rgb = colorize(field)
        return rgb[self.rows, self.cols]


def save_frame(field, out_png: Path, raster: HexRaster) -> Path:
    out_png = Path(out_png)
    out_png.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(out_png, raster.render(field))
    return out_png
