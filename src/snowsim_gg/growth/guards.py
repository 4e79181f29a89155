# -*- coding: utf-8 -*-
"""
负质量守卫
原模型默认所有质量非负；mu/gamma 超出 [0,1] 等激进参数下，融化/冻结后可能出现负值。
默认：记 warning 并截断到 0；严格模式（调试用）：抛 NegativeMassUnderflow。
"""
from __future__ import annotations

import logging
import numpy as np

from ..core.errors import NegativeMassUnderflow

__all__ = ["clamp_nonnegative", "guard_masses"]

logger = logging.getLogger(__name__)

_MASS_FIELDS = ("diffusive_mass", "boundary_mass", "crystal_mass")


def clamp_nonnegative(arr: np.ndarray, field: str, *, strict: bool = False) -> int:
    """原地把负值截断为 0，返回被截断的元胞数。"""
    neg = arr < 0.0
    if not neg.any():
        return 0
    count = int(np.count_nonzero(neg))
    minimum = float(arr[neg].min())
    if strict:
        raise NegativeMassUnderflow(field, count, minimum)
    logger.warning("%s 出现 %d 个负值（最小 %.3e），已截断为 0", field, count, minimum)
    arr[neg] = 0.0
    return count


def guard_masses(lattice, *, strict: bool = False) -> int:
    return sum(
        clamp_nonnegative(getattr(lattice, name), name, strict=strict)
        for name in _MASS_FIELDS
    )
