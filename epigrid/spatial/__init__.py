"""Grid stepping engine and simulation driver"""

from .grid import PopulationGrid, neighborhood_half_width
from .spatial_seir_simulator import SpatialSEIRSimulator, SimulationConfig, plot_results

__all__ = [
    'PopulationGrid',
    'neighborhood_half_width',
    'SpatialSEIRSimulator',
    'SimulationConfig',
    'plot_results'
]
