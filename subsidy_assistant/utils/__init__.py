"""
Utility functions for the IT Subsidy Assistant
"""

from .coercion import (
    to_number,
    to_js_string,
    strict_equals,
    same_value_zero,
    round_half_up
)

__all__ = [
    "to_number",
    "to_js_string",
    "strict_equals",
    "same_value_zero",
    "round_half_up"
]
