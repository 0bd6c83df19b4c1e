# Candidate searches and system comparison
from .grid import frange, ParameterAxis, ParameterGrid, GridPoint, SearchRanges
from .base import CandidateSearch, SearchBudget, SearchOutcome
from .flat_plate import FlatPlateSearch
from .one_way_beam import OneWayBeamSearch
from .two_way_beam import TwoWayBeamSearch
from .comparator import SystemComparator, compute_optimization
