"""
Utils package
"""

from .normalization import normalize_amount, to_decimal

__all__ = [
    "normalize_amount",
    "to_decimal",
]
