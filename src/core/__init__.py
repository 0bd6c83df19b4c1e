# Core data model, constants and configuration
from .data_models import (
    ProjectInput, CostParameters, SlabCostPoint, DesignResult, OptimizationResults,
    StructuralSystem, Occupancy, InputError, CostTableError, NO_FEASIBLE_SYSTEM,
)
from .constants import CONCRETE_STRENGTHS, REFERENCE_SPANS, INFEASIBLE_UNIT_COST
from .cost_tables import DEFAULT_PT_SLAB_COSTS, DEFAULT_UNIT_COSTS
from .config import EngineConfig
