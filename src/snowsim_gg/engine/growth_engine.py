"""
生长引擎（GrowthEngine）
========================

【功能】
持有 Settings 与 LatticeState，按固定顺序推进一个 tick：
  扩散 → 冻结 → 附着 → 融化
tick 顺序本身就是物理模型，不可调换或交错。

【对外接口】
- GrowthEngine(settings)      构造并放置晶核（grid_size 非法时抛 InvalidConfiguration）
- reset(settings=None)        重新放置晶核
- advance()                   推进一个 tick，返回只读 FieldView
- run(ticks)                  连续推进若干 tick
- get_field() / field         只读视图（下一次推进前有效）
- resize(grid_size)           丢弃并重建晶格
- set_param(name, value)      速率参数下一步立即生效；grid_size 走 resize
- apply_preset(name)          载入命名预设并重置

【严格模式】
strict_mass=True 时负质量直接抛 NegativeMassUnderflow；
此时 tick 在副本上执行，成功才提交，外部看不到半步状态。
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.errors import InvalidConfiguration
from ..core.lattice import FieldView, LatticeState, create_lattice
from ..core.presets import get_preset
from ..core.settings import RATE_FIELDS, Settings, as_grid_size
from ..growth.process import GrowthProcess

logger = logging.getLogger(__name__)


class GrowthEngine:
    """
    【成员】
    - step: int           已推进的 tick 数
    - process: GrowthProcess
    - strict_mass: bool
    """

    def __init__(self, settings: Optional[Settings] = None, *, strict_mass: bool = False):
        self.strict_mass = bool(strict_mass)
        self.process = GrowthProcess(strict=self.strict_mass)
        self._settings: Settings = Settings()
        self._lattice: LatticeState
        self.step = 0
        self.reset(settings if settings is not None else Settings())

    # =====================
    # 状态迁移
    # =====================
    def reset(self, settings: Optional[Settings] = None) -> FieldView:
        if settings is not None:
            self._settings = settings.copy()
        self._settings.validate()

        self._lattice = create_lattice(self._settings)
        self.step = 0
        logger.debug(
            "reset: grid_size=%d rho=%g", self._settings.grid_size, self._settings.rho
        )
        return self.get_field()

    def advance(self) -> FieldView:
        s = self._settings
        work = self._lattice.copy() if self.strict_mass else self._lattice

        self.process.diffusion(work, s)
        self.process.freezing(work, s)
        attached = self.process.attachment(work, s)
        self.process.melting(work, s)

        self._lattice = work
        self.step += 1
        if attached:
            logger.debug("step=%d attached=%d", self.step, attached)
        return self.get_field()

    def run(self, ticks: int) -> FieldView:
        for _ in range(int(ticks)):
            self.advance()
        return self.get_field()

    # =====================
    # 只读访问
    # =====================
    def get_field(self) -> FieldView:
        return self._lattice.view(self.step)

    @property
    def field(self) -> FieldView:
        return self.get_field()

    @property
    def settings(self) -> Settings:
        return self._settings.copy()

    @property
    def grid_size(self) -> int:
        return self._lattice.grid_size

    # =====================
    # 参数修改
    # =====================
    def resize(self, grid_size: int) -> FieldView:
        new = self._checked_size(grid_size)
        logger.info("resize: %d -> %d", self._lattice.grid_size, new.grid_size)
        return self.reset(new)

    def set_param(self, name: str, value: Any) -> None:
        if name == "grid_size":
            self.resize(value)
            return
        setattr(self._settings, name, self._checked_rate(name, value))

    def update(self, **params: Any) -> None:
        """整体生效：任何一个参数非法都不修改当前状态。"""
        unknown = sorted(set(params) - set(RATE_FIELDS) - {"grid_size"})
        if unknown:
            raise InvalidConfiguration(f"未知参数：{unknown}")

        new_size = None
        if "grid_size" in params:
            new_size = self._checked_size(params.pop("grid_size")).grid_size
        rates = {name: self._checked_rate(name, value) for name, value in params.items()}

        for name, value in rates.items():
            setattr(self._settings, name, value)
        if new_size is not None and new_size != self._settings.grid_size:
            self.resize(new_size)

    def _checked_size(self, grid_size: Any) -> Settings:
        new = self._settings.copy()
        new.grid_size = as_grid_size(grid_size)
        return new.validate()

    @staticmethod
    def _checked_rate(name: str, value: Any) -> float:
        if name not in RATE_FIELDS:
            raise InvalidConfiguration(f"未知参数 {name!r}，可选：{('grid_size',) + RATE_FIELDS}")
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"参数 {name} 不是数值：{value!r}") from exc

    def apply_preset(self, name: str, grid_size: Optional[int] = None) -> FieldView:
        preset = get_preset(name) if grid_size is None else get_preset(name, grid_size)
        logger.info("apply preset %r (grid_size=%d)", name, preset.grid_size)
        return self.reset(preset)
