"""
Engineering Constants for ACI 318-19 Post-Tensioned Floor Design
"""

# Material Densities
CONCRETE_UNIT_WEIGHT = 150.0   # pcf, normal weight concrete
STEEL_UNIT_WEIGHT = 490.0      # pcf

# Prestressing Steel (Grade 270, 0.5" 7-wire strand)
STRAND_ULTIMATE_STRENGTH = 270000   # fpu (psi)
STRAND_YIELD_RATIO = 0.9            # fpy = 0.9 fpu (low relaxation)
STRAND_JACKING_RATIO = 0.74         # fpe before losses = 0.74 fpu
STRAND_AREA = 0.153                 # sq in
STRAND_WEIGHT_PER_FT = 0.52         # lb/ft
STRAND_DIAMETER = 0.5               # in
SLAB_STRAND_DIAMETER = 0.375        # in, beam-supported slabs
ANCHORAGE_ALLOWANCE = 1.02          # 2% extra length for end anchorages

# Mild Steel (Grade 60, #4 bars)
REBAR_YIELD_STRENGTH = 60000        # fy (psi)
REBAR_BAR_AREA = 0.20               # sq in (#4)
REBAR_WEIGHT_PER_FT = 0.668         # lb/ft (#4)
BEAM_REBAR_RATIO_ONE_WAY = 0.0018
BEAM_REBAR_RATIO_TWO_WAY = 0.0020

# Loads (ASCE 7 / IBC 2021 parking)
PARKING_LIVE_LOAD = 40.0            # psf
WHEEL_LOAD = 3000.0                 # lb
WHEEL_CONTACT_SIZE = 4.5            # in (square patch)
SERVICE_LIVE_LOAD_FRACTION = 0.3    # live load share in service stress checks

# Load Factors (ACI 318-19 Table 5.3.1)
LOAD_FACTOR_DEAD = 1.2
LOAD_FACTOR_LIVE = 1.6

# Moment coefficient for continuous spans (wL²/10)
CONTINUOUS_MOMENT_COEFFICIENT = 0.1

# Stress Limits (ACI 318-19 Tables 24.5.3.1, 24.5.4.1, 24.5.2.1)
TRANSFER_STRENGTH_RATIO = 0.7       # fci = 0.7 fc
TRANSFER_COMPRESSION_FACTOR = 0.60
TRANSFER_TENSION_FACTOR = 3.0       # x sqrt(fci)
SERVICE_COMPRESSION_SUSTAINED_FACTOR = 0.45
SERVICE_COMPRESSION_TOTAL_FACTOR = 0.60
SERVICE_TENSION_FACTOR = 6.0        # x sqrt(fc), Class T
TWO_WAY_TENSION_THRESHOLD = 2.0     # x sqrt(fc), ACI 24.4.3.4

# Flexure (ACI 318-19 Cl 20.3.2.4, 21.2.2)
CONCRETE_ULTIMATE_STRAIN = 0.003
TENSION_CONTROLLED_STRAIN = 0.005
COMPRESSION_CONTROLLED_STRAIN = 0.002
PHI_TENSION_CONTROLLED = 0.90
PHI_COMPRESSION_CONTROLLED = 0.65
TENDON_STRESS_INCREMENT = 10000     # psi
TENDON_STRESS_RATIO_CAP = 30000     # psi, fc/(100 rho_p) ceiling
TENDON_STRESS_ADDITIVE_CAP = 60000  # psi, fps <= fpe + 60 ksi

# Deflection & Vibration
MODULUS_OF_RUPTURE_FACTOR = 7.5     # x sqrt(fc)
CRACKED_INERTIA_RATIO = 0.35
CRACKED_INERTIA_RATIO_TWO_WAY = 0.45
LONG_TERM_CAMBER_FACTOR = 0.8
DEFLECTION_LIMIT_RATIO = 480        # L/480
CAMBER_LIMIT_RATIO = 300            # L/300
GRAVITY_IN_PER_S2 = 386.4
FREQUENCY_CONSTANT = 0.18
MIN_NATURAL_FREQUENCY = 5.0         # Hz, parking structures
TWO_WAY_FREQUENCY_FACTOR = 1.2

# Punching Shear (ACI 318-19 Cl 22.6.5.2)
PHI_SHEAR = 0.75
PUNCHING_ALPHA_S = 40               # interior
PUNCHING_BETA = 1.0                 # square patch
PRESTRESS_SHEAR_FACTOR = 0.3

# Minimum Average Prestress (ACI 362.1R, ACI 318-19 Cl 8.6.2.1)
MIN_AVG_PRESTRESS_PARKING = 175.0   # psi
MIN_AVG_PRESTRESS_GENERAL = 125.0   # psi

# Mild Steel Minimums
TEMPERATURE_SHRINKAGE_RATIO = 0.0018
TEMPERATURE_SHRINKAGE_RATIO_LOW_GRADE = 0.0020
TEMPERATURE_SHRINKAGE_RATIO_FLOOR = 0.0014
BONDED_REINFORCEMENT_FACTOR = 1.2   # As = Mcr / (1.2 fy d)
TWO_WAY_NEGATIVE_STEEL_RATIO = 0.00075

# Geometry
STRIP_WIDTH = 12.0                  # in, per-foot strip
MIN_FLAT_PLATE_ECCENTRICITY = 1.0   # in
MIN_SLAB_ECCENTRICITY = 0.5         # in
BEAM_EXTRA_COVER = 0.5              # in, stirrups
BEAM_TENDON_OFFSET = 1.0            # in, tendon centroid to cover
SLAB_EFFECTIVE_DEPTH_OFFSET = 1.5   # in, d = h - 1.5

# Span/Depth Ratios (PTI DC20.9)
SPAN_DEPTH_RATIOS = {
    "flat_plate": 50,
    "one_way_slab": 48,
    "two_way_slab": 55,
    "beam_min": 20,
    "beam_max": 12,
}

# Minimum / Maximum Element Dimensions (in)
MIN_FLAT_PLATE_THICKNESS = 5.0
MAX_FLAT_PLATE_THICKNESS = 16.0
MIN_ONE_WAY_SLAB_THICKNESS = 4.0
MAX_ONE_WAY_SLAB_THICKNESS = 12.0
MIN_TWO_WAY_SLAB_THICKNESS = 3.0
MAX_TWO_WAY_SLAB_THICKNESS = 10.0
MIN_BEAM_DEPTH = 12
MAX_BEAM_DEPTH = 48

# Concrete strengths searched (psi) and the spans below which they are skipped
CONCRETE_STRENGTHS = (5000, 7000, 10000, 12000, 15000)
HIGH_STRENGTH_SPAN_RULES = (
    (10000, 30.0),   # fc > 10000 psi needs span >= 30 ft
    (12000, 40.0),   # fc > 12000 psi needs span >= 40 ft
)

# Comparison
REFERENCE_SPANS = (18, 24, 27, 30, 36, 40, 45, 49, 54, 60)
INFEASIBLE_UNIT_COST = 999.0        # $/sf sentinel

# Cost Fallbacks
DEFAULT_MILD_STEEL_COST_PER_LB = 1.20
DEFAULT_CONCRETE_COST_PER_CY = 220.0
CUBIC_FEET_PER_CUBIC_YARD = 27.0
