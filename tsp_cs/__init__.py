"""
City-selection travelling salesman problem (TSP-CS): validated instances, chromosome
encodings, best-stretch evaluation and feasibility constraints.
"""

__all__ = [
    "cli",
    "data",
    "evaluation",
    "problems",
]
