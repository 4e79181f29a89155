# -*- coding: utf-8 -*-
"""
模型参数（Settings）
====================

【字段】
- grid_size : 晶格边长（正整数），晶格为 grid_size × grid_size
- rho       : 初始水汽密度
- beta      : 尖端/平面（1–2 个晶体邻居）附着阈值
- kappa     : 边界处水汽直接结晶的比例
- mu        : 准液层（边界质量）融化率
- gamma     : 晶体质量融化率
- theta     : 刀刃失稳判据的邻域水汽阈值
- alpha     : 刀刃失稳时降低后的边界质量阈值
- sigma     : 噪声幅度（保留字段，任何过程都不读取）

默认值与原始交互程序的初始参数一致。
参数在两次 reset 之间可以单独修改；只有 grid_size 的修改需要重建晶格。
"""

from __future__ import annotations

import numbers
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

from .errors import InvalidConfiguration

__all__ = ["Settings", "RATE_FIELDS", "as_grid_size"]


@dataclass
class Settings:
    grid_size: int = 400
    rho: float = 0.635
    beta: float = 1.6
    kappa: float = 0.005
    mu: float = 0.015
    gamma: float = 0.0005
    theta: float = 0.025
    alpha: float = 0.4
    sigma: float = 0.0

    def validate(self) -> "Settings":
        """grid_size 必须为正整数；不做任何截断或修正。"""
        n = self.grid_size
        if isinstance(n, bool) or not isinstance(n, numbers.Integral):
            raise InvalidConfiguration(f"grid_size 必须为整数，得到 {n!r}")
        if n <= 0:
            raise InvalidConfiguration(f"grid_size 必须为正，得到 {n}")
        return self

    def copy(self) -> "Settings":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfiguration(f"未知的模型参数：{unknown}")

        kw: Dict[str, Any] = {}
        for key, value in data.items():
            if key == "grid_size":
                kw[key] = as_grid_size(value)
            else:
                try:
                    kw[key] = float(value)
                except (TypeError, ValueError) as exc:
                    raise InvalidConfiguration(f"参数 {key} 不是数值：{value!r}") from exc
        return cls(**kw).validate()


# 除 grid_size 外的全部参数：修改后下一步立即生效，不重建晶格
RATE_FIELDS = tuple(f.name for f in fields(Settings) if f.name != "grid_size")


def as_grid_size(value: Any) -> Any:
    # JSON 里 200.0 这类整值浮点视为整数；2.5 原样保留，交给 validate() 拒绝
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
