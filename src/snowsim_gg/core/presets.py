# -*- coding: utf-8 -*-
"""
命名参数预设（来自 Gravner–Griffeath 论文中的图例）
"""
from __future__ import annotations
from typing import Dict, List

from .errors import InvalidConfiguration
from .settings import Settings

__all__ = ["PRESETS", "preset_names", "get_preset"]


PRESETS: Dict[str, Dict[str, float]] = {
    # Fig 2 tr：典型扇形板
    "Sectored Plate": dict(
        rho=0.8, beta=2.9, kappa=0.05, mu=0.015, gamma=0.0001,
        theta=0.004, sigma=0.00002, alpha=0.006,
    ),
    # Fig 9：极低 beta 的致密板
    "Low-Beta Plate": dict(
        rho=1.3, beta=0.08, kappa=0.07, mu=0.00005, gamma=0.0,
        theta=0.003, sigma=0.0, alpha=0.025,
    ),
    # Fig 10：极低 beta 下的尖端刻面
    "Tip Faceting": dict(
        rho=0.8, beta=0.004, kappa=0.015, mu=0.0001, gamma=0.0,
        theta=0.05, sigma=0.0, alpha=0.001,
    ),
    # Fig 11：高度分枝枝晶
    "Highly Branched Dendrite": dict(
        rho=0.635, beta=1.6, kappa=0.015, mu=0.0005, gamma=0.0,
        theta=0.025, sigma=0.0, alpha=0.4,
    ),
    # Fig 12：纤细星状枝晶
    "Delicate Stellar Dendrite": dict(
        rho=0.5, beta=1.4, kappa=0.001, mu=0.001, gamma=0.001,
        theta=0.005, sigma=0.0, alpha=0.1,
    ),
    # Fig 13 l：简单六角星
    "Simple Star": dict(
        rho=0.65, beta=1.75, kappa=0.15, mu=0.015, gamma=0.00001,
        theta=0.2, sigma=0.0, alpha=0.026,
    ),
    # Fig 13 m：星状板
    "Stellar Plate": dict(
        rho=0.36, beta=1.09, kappa=0.0001, mu=0.14, gamma=0.00001,
        theta=0.0745, sigma=0.0, alpha=0.01,
    ),
    # Fig 13 r：末端带枝晶的板
    "Plate with Dendrite Ends": dict(
        rho=0.38, beta=1.06, kappa=0.001, mu=0.14, gamma=0.0006,
        theta=0.112, sigma=0.0, alpha=0.35,
    ),
}

PRESET_GRID_SIZE = 512


def preset_names() -> List[str]:
    return list(PRESETS)


def get_preset(name: str, grid_size: int = PRESET_GRID_SIZE) -> Settings:
    try:
        params = PRESETS[name]
    except KeyError:
        raise InvalidConfiguration(
            f"未知预设 {name!r}，可选：{preset_names()}"
        ) from None
    return Settings(grid_size=grid_size, **params).validate()
