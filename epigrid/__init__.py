"""Stochastic SEIRD epidemic modeling on a toroidal host grid"""

from . import core
from . import spatial

__all__ = ['core', 'spatial']
