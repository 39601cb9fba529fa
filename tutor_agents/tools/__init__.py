from .calculator import contains_expression, evaluate, format_number, is_expression
from .constants import ConstantEntry, PHYSICS_CONSTANTS, build_constant_table
from .fuzzy_matcher import FuzzyMatcher, Match

__all__ = [
    "contains_expression",
    "evaluate",
    "format_number",
    "is_expression",
    "ConstantEntry",
    "PHYSICS_CONSTANTS",
    "build_constant_table",
    "FuzzyMatcher",
    "Match",
]
