from .base import ConfigurationError, Problem, SubsequenceResult, Tour, tour_length
from .constraints import compute_idx, full_constraints, order_labels, permutation_constraint
from .encoding import Codec, Encoding, compute_dimensions
from .graph import GraphConfig, check_weights
from .subsequence import find_city_subsequence, iter_windows
from .tsp_cs import CitySelectionTSP
from .zdt1 import Zdt1

__all__ = [
    "ConfigurationError",
    "Problem",
    "SubsequenceResult",
    "Tour",
    "tour_length",
    "compute_idx",
    "full_constraints",
    "order_labels",
    "permutation_constraint",
    "Codec",
    "Encoding",
    "compute_dimensions",
    "GraphConfig",
    "check_weights",
    "find_city_subsequence",
    "iter_windows",
    "CitySelectionTSP",
    "Zdt1",
]
