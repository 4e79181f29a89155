# src/snowsim_gg/viz/liveplot.py
from __future__ import annotations
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.image import AxesImage

from .render import HexRaster


class LivePlotter:
    """
    实时显示六角晶格着色图
    - 只创建一次窗口，循环内仅 set_data + draw_idle
    - 支持 stride 节流
    - grid_size 变化时重建像素映射
    """

    def __init__(self, cfg: Optional[dict] = None) -> None:
        cfg = cfg or {}
        self.enabled: bool = bool(cfg.get("enabled", True))
        self.stride: int = max(1, int(cfg.get("stride", 10)))
        self.size: int = int(cfg.get("size", 600))
        self.scale: float = float(cfg.get("scale", 1.0))
        self.figsize = tuple(cfg.get("figsize", (7, 7)))
        self.keep_open: bool = bool(cfg.get("keep_open", False))

        self._fig: Optional[Figure] = None
        self._ax: Optional[Axes] = None
        self._image: Optional[AxesImage] = None
        self._raster: Optional[HexRaster] = None

    def _raster_for(self, field) -> HexRaster:
        if self._raster is None or self._raster.grid_size != field.grid_size:
            self._raster = HexRaster(field.grid_size, self.size, self.scale)
        return self._raster

    # -------- 生命周期 -------- #
    def start(self, field) -> None:
        if not self.enabled or self._fig is not None:
            return

        plt.ion()
        self._fig = plt.figure("snowsim live", figsize=self.figsize)
        self._ax = self._fig.add_subplot(1, 1, 1)
        self._ax.set_axis_off()
        self._image = self._ax.imshow(
            self._raster_for(field).render(field), interpolation="nearest"
        )
        self._fig.tight_layout()
        plt.show(block=False)

    def update(self, field, step: int) -> None:
        if not self.enabled:
            return
        if self._fig is None:
            self.start(field)
        if step % self.stride != 0:
            return

        self._image.set_data(self._raster_for(field).render(field))
        self._fig.suptitle(f"step = {step}", fontsize=11)
        self._fig.canvas.draw_idle()
        plt.pause(0.001)

    def hold(self) -> None:
        """阻塞显示，直到用户手动关闭窗口。"""
        if self._fig is not None:
            plt.ioff()
            self._fig.canvas.draw_idle()
            plt.show()

    def close(self) -> None:
        if self._fig is not None:
            if self.keep_open:
                self.hold()
            else:
                plt.close(self._fig)
            self._fig = None
