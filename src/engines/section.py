"""
Section Geometry
Gross properties of rectangular slab strips and beam sections
"""

from dataclasses import dataclass

from ..core.constants import STRIP_WIDTH


@dataclass(frozen=True)
class SectionProperties:
    """Gross section properties (in units)"""
    width: float        # b (in)
    depth: float        # h (in)
    area: float         # A (sq in)
    inertia: float      # Ig (in^4)
    y_top: float        # centroid to top fiber (in)
    y_bottom: float     # centroid to bottom fiber (in)

    @property
    def s_top(self) -> float:
        """Section modulus to the top fiber (in^3)"""
        return self.inertia / self.y_top

    @property
    def s_bottom(self) -> float:
        """Section modulus to the bottom fiber (in^3)"""
        return self.inertia / self.y_bottom


def rectangular_section(width: float, depth: float) -> SectionProperties:
    if width <= 0 or depth <= 0:
        raise ValueError(f"Section dimensions must be positive, got {width} x {depth}")
    return SectionProperties(
        width=width,
        depth=depth,
        area=width * depth,
        inertia=width * depth ** 3 / 12,
        y_top=depth / 2,
        y_bottom=depth / 2,
    )


def slab_strip(thickness: float) -> SectionProperties:
    """One-foot-wide slab strip"""
    return rectangular_section(STRIP_WIDTH, thickness)
