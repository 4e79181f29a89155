# -*- coding: utf-8 -*-
"""
错误类型（全包共用）
- InvalidConfiguration : 配置非法（grid_size 非正整数、未知参数名、未知预设等），构造/重置时立即抛出
- NegativeMassUnderflow : 质量场出现负值（严格模式下由负质量守卫抛出）
"""
from __future__ import annotations

__all__ = ["SnowSimError", "InvalidConfiguration", "NegativeMassUnderflow"]


class SnowSimError(Exception):
    """本包所有异常的基类。"""


class InvalidConfiguration(SnowSimError, ValueError):
    pass


class NegativeMassUnderflow(SnowSimError, ArithmeticError):
    """
    【功能】某个质量场在过程计算后出现负值。

    【成员】
    - field: str     字段名，例如 "crystal_mass"
    - count: int     负值元胞数
    - minimum: float 最小值（最负的那个）
    """

    def __init__(self, field: str, count: int, minimum: float):
        self.field = field
        self.count = int(count)
        self.minimum = float(minimum)
        super().__init__(
            f"{field} 出现 {self.count} 个负值元胞（最小值 {self.minimum:.6e}）"
        )
