# Engineering calculation engines
from .materials import StressLimits, concrete_modulus, stress_limits, cover_requirement, loss_ratio
from .cost_model import CostModel, base_concrete_cost, interpolated_slab_cost, strength_adjusted_slab_cost
from .section import SectionProperties, rectangular_section, slab_strip
from .stress import FiberStresses, StressCheck, fiber_stresses, check_stresses
from .capacity import check_moment_capacity, check_deflection, check_punching_shear
from .rebar import size_mild_steel, temperature_shrinkage_ratio
