from .errors import InvalidConfiguration, NegativeMassUnderflow, SnowSimError
from .lattice import FieldView, LatticeState, create_lattice
from .presets import get_preset, preset_names
from .settings import Settings

__all__ = [
    "Settings",
    "LatticeState",
    "FieldView",
    "create_lattice",
    "get_preset",
    "preset_names",
    "SnowSimError",
    "InvalidConfiguration",
    "NegativeMassUnderflow",
]
