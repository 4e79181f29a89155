"""
growth 包的对外 API。

每个 tick 依次执行：diffuse → freeze → attach → melt
"""

from .diffusion import diffuse
from .freezing import freeze
from .attachment import attach
from .melting import melt
from .process import GrowthProcess

__all__ = ["diffuse", "freeze", "attach", "melt", "GrowthProcess"]
