"""
Default Unit Cost Tables for PT Parking Structures (2024 US market, $)
"""

from typing import Dict, List, Tuple


# PT slab unit cost by thickness (in, $/sf), placed and finished, 5000 psi concrete
DEFAULT_PT_SLAB_COSTS: Tuple[Tuple[float, float], ...] = (
    (3.0, 10.50),
    (4.0, 11.00),
    (5.0, 11.50),
    (6.0, 12.50),
    (7.0, 13.00),
    (8.0, 14.00),
    (9.0, 15.50),
    (10.0, 17.00),
    (11.0, 18.80),
    (12.0, 22.50),
)

DEFAULT_UNIT_COSTS: Dict[str, float] = {
    "pt_formwork_cost_per_sf": 4.50,
    "beam_forming_cost_per_cf": 22.00,
    "beam_pouring_cost_per_cf": 22.00,
    "pt_strand_cost_per_lb": 1.15,
    "mild_steel_cost_per_lb": 1.20,
    "concrete_cost_per_cy": 220.0,
}

# Ready-mix premium schedule ($/cy per 1000 psi)
CONCRETE_REFERENCE_STRENGTH = 5000
CONCRETE_PREMIUM_THRESHOLD = 12000
CONCRETE_PREMIUM_PER_KSI = 15.0
CONCRETE_HIGH_PREMIUM_THRESHOLD = 12000
CONCRETE_HIGH_PREMIUM_PER_KSI = 26.0


def default_slab_cost_rows() -> List[Dict[str, float]]:
    """Default slab cost table in the persisted (camelCase) record shape"""
    return [
        {"thickness": thickness, "costPerSf": cost}
        for thickness, cost in DEFAULT_PT_SLAB_COSTS
    ]
