"""
IT Subsidy Assistant

Matches small-business profiles against the eligibility rules of
government IT and business subsidy programs.
"""

__version__ = "1.0.0"
__author__ = "IT Subsidy Assistant Team"
__description__ = "Weighted eligibility matching for government subsidy programs"
