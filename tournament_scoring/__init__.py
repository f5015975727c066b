"""
Tournament Schedule Scoring.
Incremental hard/medium/soft scoring of tournament team assignments.
"""

__version__ = "1.0.0"
