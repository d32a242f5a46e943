"""RuleCraft - rule engine service.

Express eligibility rules as boolean text expressions over named
attributes, store and combine them, and evaluate them against records.
"""

__version__ = "0.1.0"
