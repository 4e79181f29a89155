from .diffusion import diffuse
from .freezing import freeze
from .attachment import attach
from .melting import melt


class GrowthProcess:
    """四个过程的门面；顺序由调用方（GrowthEngine）固定。"""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def diffusion(self, lattice, settings) -> None:
        diffuse(lattice, settings)

    def freezing(self, lattice, settings) -> None:
        freeze(lattice, settings, strict=self.strict)

    def attachment(self, lattice, settings) -> int:
        return attach(lattice, settings)

    def melting(self, lattice, settings) -> None:
        melt(lattice, settings, strict=self.strict)
