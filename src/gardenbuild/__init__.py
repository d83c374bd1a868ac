"""
gardenbuild - parametric drawing composer for modular garden buildings.
"""

__version__ = "0.1.0"
