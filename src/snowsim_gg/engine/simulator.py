"""
求解器（Simulator）
===================

【功能】
宿主侧的批处理驱动：构造 GrowthEngine，按配置推进若干 tick，
定期记录诊断量、输出渲染帧、刷新实时窗口。
引擎本身不关心节奏，多少 tick 出一帧完全由这里决定。

【输入】
- cfg: dict，结构见 config_loader.load_cfg

【输出】
- output_dir/meta_config.json   运行配置
- output_dir/frame_XXXXXX.png   渲染帧（viz.frames.enabled 时）
- 日志：晶体元胞数、总质量、晶体半径

注：环面回绕只是无限平面的近似，晶体半径接近 grid_size/2 时会告警一次。
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config_loader import settings_from_cfg
from ..core.lattice import crystal_count, crystal_extent, total_mass
from ..io.writer import frame_path, prepare_out, write_meta
from ..viz.liveplot import LivePlotter
from ..viz.render import HexRaster, save_frame
from .growth_engine import GrowthEngine

logger = logging.getLogger(__name__)


class Simulator:
    """
    【成员】
    - cfg: dict
    - engine: GrowthEngine
    - out: Path
    - raster: Optional[HexRaster]   帧渲染器（未启用时为 None）
    - live: Optional[LivePlotter]
    """

    def __init__(self, cfg: Dict[str, Any]):
        self.cfg = cfg
        run_cfg = cfg["run"]

        # 1) 引擎
        self.engine = GrowthEngine(
            settings_from_cfg(cfg), strict_mass=bool(run_cfg.get("strict_mass", False))
        )

        # 2) 输出目录与元数据
        self.out = prepare_out(run_cfg["output_dir"])
        write_meta(cfg, self.out, self.engine.settings)

        # 3) 帧渲染与实时显示
        viz = cfg.get("viz", {})
        frames = viz.get("frames", {})
        self.raster: Optional[HexRaster] = None
        if frames.get("enabled", True):
            self.raster = HexRaster(
                self.engine.grid_size,
                size=int(frames.get("size", 600)),
                scale=float(frames.get("scale", 1.0)),
            )
        live_cfg = viz.get("live", {})
        self.live: Optional[LivePlotter] = (
            LivePlotter(live_cfg) if live_cfg.get("enabled", False) else None
        )

        self._edge_warned = False

    def run(self) -> None:
        steps = int(self.cfg["time"]["steps"])
        save_every = int(self.cfg["time"]["save_every"])
        edge_ratio = float(self.cfg["run"].get("edge_warn_ratio", 0.9))

        logger.info(
            "开始：grid_size=%d steps=%d settings=%s",
            self.engine.grid_size,
            steps,
            self.engine.settings,
        )
        if self.live:
            self.live.start(self.engine.field)

        try:
            for _ in range(steps):
                field = self.engine.advance()
                step = self.engine.step

                if step % save_every == 0:
                    self._report(field, step, edge_ratio)
                    self._save(field, step)

                if self.live:
                    self.live.update(field, step)

            # 循环结束后保存一次（最后一步恰好已保存时跳过）
            if steps == 0 or self.engine.step % save_every != 0:
                field = self.engine.field
                self._report(field, self.engine.step, edge_ratio)
                self._save(field, self.engine.step)
        finally:
            if self.live:
                self.live.close()

    def _report(self, field, step: int, edge_ratio: float) -> None:
        extent = crystal_extent(field)
        logger.info(
            "step=%d crystal=%d extent=%d total_mass=%.9g",
            step,
            crystal_count(field),
            extent,
            total_mass(field),
        )
        limit = edge_ratio * (field.grid_size // 2)
        if not self._edge_warned and extent >= limit:
            logger.warning(
                "晶体半径 %d 已接近网格边缘（grid_size=%d），环面回绕开始影响结果",
                extent,
                field.grid_size,
            )
            self._edge_warned = True

    def _save(self, field, step: int) -> None:
        if self.raster is not None:
            save_frame(field, frame_path(self.out, step), self.raster)
