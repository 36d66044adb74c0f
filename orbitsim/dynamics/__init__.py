"""
Dynamics Module
===============

Forces, integration and orbit classification.
"""

from .forces import ForceBreakdown, ForceModel
from .integrators import SymplecticEuler, circular_velocity
from .classifier import OrbitClass, OrbitClassifier, specific_energy

__all__ = [
    'ForceBreakdown',
    'ForceModel',
    'SymplecticEuler',
    'circular_velocity',
    'OrbitClass',
    'OrbitClassifier',
    'specific_energy',
]
