"""
Incremental scoring: fairness aggregate, collectors, streams and rules.
"""

from .score import HardMediumSoftScore
from .fairness import FairnessState, InsertUndo
from .collectors import LoadBalanceCollector, LoadBalanceBiCollector, load_balance, load_balance_pairs
from .streams import Constraint, ConstraintFactory, equal, less_than
from .score_director import ScoreDirector, ChangeUndo, calculate_score_from_scratch
from .constraints import define_constraints

__all__ = [
    "HardMediumSoftScore",
    "FairnessState",
    "InsertUndo",
    "LoadBalanceCollector",
    "LoadBalanceBiCollector",
    "load_balance",
    "load_balance_pairs",
    "Constraint",
    "ConstraintFactory",
    "equal",
    "less_than",
    "ScoreDirector",
    "ChangeUndo",
    "calculate_score_from_scratch",
    "define_constraints"
]
