"""
Spatial SEIRD Epidemic Simulator
================================
Owns one disease model and one population grid, seeds the epidemic and
advances it day by day until the infection dies out or the day budget
runs out
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from .grid import PopulationGrid
from ..core.disease_model import DiseaseModel
from ..core.disease_params import DiseaseParameters
from ..core.host import DiseaseState

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for spatial epidemic simulation"""
    total_days: int = 1000  # Day budget

    # Grid parameters
    grid_rows: int = 100
    grid_cols: int = 100

    # Initial conditions
    initial_infections: int = 1  # Seed draws, with replacement

    # Days advanced per recorded step
    step_size: int = 1

    # Random seed
    seed: Optional[int] = None


class SpatialSEIRSimulator:
    """
    Stochastic SEIRD simulator on a toroidal host grid
    """

    def __init__(self,
                 config: SimulationConfig,
                 disease_params: DiseaseParameters = None):
        """
        Initialize spatial simulator

        Args:
            config: Simulation configuration
            disease_params: Disease parameters (uses defaults if None)
        """
        self.config = config

        if disease_params is None:
            disease_params = DiseaseParameters()
        self.disease_params = disease_params

        # Independent streams for disease draws and seed positions
        disease_seed, grid_seed = np.random.SeedSequence(config.seed).spawn(2)
        self.disease = DiseaseModel(disease_params, rng=np.random.default_rng(disease_seed))
        self.grid = PopulationGrid(
            self.disease,
            rows=config.grid_rows,
            cols=config.grid_cols,
            rng=np.random.default_rng(grid_seed)
        )

        # Tracking
        self.current_day = 0
        self.history = []

    def initialize_epidemic(self):
        """Seed initial infections"""
        self.grid.seed_disease(self.config.initial_infections)
        logger.info("Seeded %d draws on a %dx%d grid (%d infected)",
                    self.config.initial_infections, self.grid.rows,
                    self.grid.cols, self.grid.count_infected())

    def reset(self):
        """Return to an all-susceptible grid on day 0 with no history"""
        self.grid.reset()
        self.grid.day = 0
        self.current_day = 0
        self.history = []

    def is_extinct(self) -> bool:
        return self.grid.count_infected() == 0

    def step(self):
        """Advance ``step_size`` days (fewer if the infection dies out) and record"""
        for _ in range(max(1, self.config.step_size)):
            if self.is_extinct() or self.current_day >= self.config.total_days:
                break
            self.grid.compute_next()
            self.current_day += 1

        self._record_state()

    def _record_state(self):
        """Record current state"""
        counts = self.grid.get_state_counts()

        record = {
            'day': self.current_day,
            'S': counts[DiseaseState.SUSCEPTIBLE],
            'E': counts[DiseaseState.EXPOSED],
            'I': counts[DiseaseState.INFECTIOUS],
            'R': counts[DiseaseState.RECOVERED],
            'D': counts[DiseaseState.DECEASED],
            'infected': counts[DiseaseState.EXPOSED] + counts[DiseaseState.INFECTIOUS],
        }

        self.history.append(record)

    def run(self, verbose: bool = True) -> pd.DataFrame:
        """
        Run full simulation

        Args:
            verbose: Print progress

        Returns:
            DataFrame with time series of SEIRD states
        """
        # Start over if a previous run left the grid mid-epidemic
        if self.history:
            self.reset()
        self.initialize_epidemic()
        self._record_state()

        if verbose:
            print(f"\nSpatial SEIRD Simulation: {self.disease.name}")
            print("=" * 60)
            print(f"Grid: {self.grid.rows} × {self.grid.cols} hosts")
            print(f"Initial infections: {self.grid.count_infected()}")
            print(f"Day budget: {self.config.total_days}")
            print(f"Estimated R0: {self.disease_params.R0_estimate:.2f}\n")

        # Main loop
        last_report = 0
        while not self.is_extinct() and self.current_day < self.config.total_days:
            self.step()

            if verbose and self.current_day - last_report >= 30:
                last_report = self.current_day
                rec = self.history[-1]
                print(f"Day {rec['day']:4d}: E={rec['E']:6d}, I={rec['I']:6d}, "
                      f"R={rec['R']:7d}, D={rec['D']:6d}")

        logger.info("Stopped after %d days (%s)", self.current_day,
                    "extinct" if self.is_extinct() else "day budget reached")

        if verbose:
            final = self.history[-1]
            print(f"\nAfter {self.current_day} days...")
            print(self.grid.summary())
            print(f"  Attack rate: {100 * (final['R'] + final['D']) / self.grid.size:.1f}%")
            print(f"  Peak infections: {max(h['infected'] for h in self.history):,}")

        return pd.DataFrame(self.history)

    def get_results(self) -> pd.DataFrame:
        """Get aggregate results"""
        return pd.DataFrame(self.history)


COMPARTMENTS = [
    ('S', 'Susceptible', '#4c72b0'),
    ('E', 'Exposed', '#dd8452'),
    ('I', 'Infectious', '#c44e52'),
    ('R', 'Recovered', '#55a868'),
    ('D', 'Deceased', '#000000'),
]


def plot_results(df: pd.DataFrame, title: str = "SEIRD Epidemic Simulation"):
    """
    Plot compartment shares and the active epidemic

    Top panel stacks every compartment as a share of the grid; bottom
    panel separates exposed from infectious hosts, with the new
    exposures per recorded step on a second axis.

    Args:
        df: Results DataFrame from simulation
        title: Plot title
    """
    import matplotlib.pyplot as plt

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 10), sharex=True)

    population = df[[key for key, _, _ in COMPARTMENTS]].sum(axis=1)
    shares = [100 * df[key] / population for key, _, _ in COMPARTMENTS]

    ax1.stackplot(df['day'], *shares,
                  labels=[label for _, label, _ in COMPARTMENTS],
                  colors=[color for _, _, color in COMPARTMENTS], alpha=0.85)
    ax1.set_ylim(0, 100)
    ax1.set_ylabel('Share of Hosts (%)', fontsize=12)
    ax1.set_title(title, fontsize=14, fontweight='bold')
    ax1.legend(loc='center right', fontsize=11)

    ax2.plot(df['day'], df['E'], label='Exposed', color='#dd8452', linewidth=2)
    ax2.plot(df['day'], df['I'], label='Infectious', color='#c44e52', linewidth=2)
    ax2.set_xlabel('Days', fontsize=12)
    ax2.set_ylabel('Active Hosts', fontsize=12)
    ax2.legend(loc='upper left', fontsize=11)
    ax2.grid(True, alpha=0.3)

    # Susceptibles only leave by exposure
    new_exposures = (-df['S'].diff()).fillna(0)
    ax2_twin = ax2.twinx()
    ax2_twin.bar(df['day'], new_exposures, color='gray', alpha=0.3,
                 label='New Exposures per Step')
    ax2_twin.set_ylabel('New Exposures per Step', fontsize=12, color='gray')
    ax2_twin.tick_params(axis='y', labelcolor='gray')

    plt.tight_layout()
    return fig


if __name__ == "__main__":
    print("Spatial SEIRD Simulator Test")
    print("=" * 70)

    config = SimulationConfig(
        total_days=1000,
        grid_rows=100,
        grid_cols=100,
        initial_infections=1,
        seed=42
    )

    simulator = SpatialSEIRSimulator(config)
    results = simulator.run(verbose=True)

    import matplotlib.pyplot as plt
    fig = plot_results(results)
    plt.savefig('seird_spatial_simulation.png', dpi=150, bbox_inches='tight')

    fig2, ax = plt.subplots(figsize=(10, 8))
    simulator.grid.plot_states(ax=ax)
    plt.savefig('seird_final_state.png', dpi=150, bbox_inches='tight')
    print("\nPlots saved as 'seird_spatial_simulation.png' and 'seird_final_state.png'")
