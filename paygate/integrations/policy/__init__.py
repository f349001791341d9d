from .decoder import decode
from .status_rules import RULES, normalize, normalize_outcome

__all__ = ["RULES", "decode", "normalize", "normalize_outcome"]
