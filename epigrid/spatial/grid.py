"""
Population Grid
===============
Dense 2D grid of hosts with toroidal adjacency and the daily stepping
engine for the SEIRD model.

Visitation order is fixed: rows top to bottom, columns left to right,
and the same row-major order inside every contact neighbourhood. Together
with the disease model's generator this fixes the order in which random
draws are consumed, so a seeded run is reproducible.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import BoundaryNorm, ListedColormap

from ..core.disease_model import DiseaseModel
from ..core.host import Host, DiseaseState

logger = logging.getLogger(__name__)


# Text rendering, one character per host
STATE_CHARS = {
    DiseaseState.SUSCEPTIBLE: 's',
    DiseaseState.EXPOSED: 'e',
    DiseaseState.INFECTIOUS: 'I',
    DiseaseState.RECOVERED: 'R',
    DiseaseState.DECEASED: ' ',
}

STATE_COLORS = {
    DiseaseState.SUSCEPTIBLE: '#4c72b0',
    DiseaseState.EXPOSED: '#dd8452',
    DiseaseState.INFECTIOUS: '#c44e52',
    DiseaseState.RESOLVED: '#8c8c8c',
    DiseaseState.RECOVERED: '#55a868',
    DiseaseState.DECEASED: '#000000',
}


def neighborhood_half_width(contacts: int) -> int:
    """
    Half-width of the square neighbourhood reached by ``contacts`` contacts

    A (2k+1) x (2k+1) square around the host holds (2k+1)^2 - 1 other
    hosts, so k = (sqrt(t + 1) - 1) / 2, rounded half away from zero.
    """
    return int(math.floor((math.sqrt(contacts + 1) - 1) / 2 + 0.5))


class PopulationGrid:
    """
    Rectangular grid of hosts along with the disease to model
    """

    def __init__(self,
                 disease: DiseaseModel,
                 rows: int = 100,
                 cols: int = 100,
                 seed: int = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize population grid

        Args:
            disease: Disease model driving every host transition
            rows: Number of rows in grid
            cols: Number of columns in grid
            seed: Random seed for seeding positions
            rng: Generator for seeding positions instead of ``seed``
        """
        self.disease = disease
        self._rows = rows
        self._cols = cols
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.day = 0

        self.hosts: List[List[Host]] = [[Host() for _ in range(cols)] for _ in range(rows)]
        self.reset()

    @property
    def rows(self) -> int:
        """Height of the map"""
        return self._rows

    @property
    def cols(self) -> int:
        """Width of the map"""
        return self._cols

    @property
    def size(self) -> int:
        return self._rows * self._cols

    def dimensions(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def host(self, i: int, j: int) -> Host:
        """Get host at position (i, j), wrapping around both edges"""
        return self.hosts[i % self._rows][j % self._cols]

    get_neighbor = host

    def __iter__(self):
        for row in self.hosts:
            yield from row

    def reset(self):
        """Return every host to susceptible with a fresh contact radius"""
        for row in self.hosts:
            for host in row:
                host.state = DiseaseState.SUSCEPTIBLE
                host.days_remaining = 0
                host.contact_radius = self.disease.num_contacts()

    def seed_disease(self, count: int):
        """
        Plant the disease in ``count`` uniformly drawn hosts

        Draws are with replacement; a repeated position re-arms the
        incubation of a host that is already exposed, so fewer than
        ``count`` distinct hosts may end up infected.
        """
        for _ in range(count):
            k = int(self.rng.integers(0, self.size))
            i, j = divmod(k, self._cols)
            self.disease.infect(self.hosts[i][j])
        logger.debug("Seeded %d draws on a %dx%d grid", count, self._rows, self._cols)

    def snapshot(self) -> List[List[Host]]:
        """Independent copy of every host record"""
        return [[host.copy() for host in row] for row in self.hosts]

    def compute_contacts(self, i: int, j: int, radius: int = None):
        """
        Identify and possibly infect the close contacts of host (i, j)

        Args:
            i, j: Position of an infectious host
            radius: Contact count to use (defaults to the live host's)
        """
        if radius is None:
            radius = self.hosts[i][j].contact_radius
        k = neighborhood_half_width(radius)

        for hi in range(i - k, i + k + 1):
            for hj in range(j - k, j + k + 1):
                neighbor = self.host(hi, hj)
                if self.disease.is_susceptible(neighbor):
                    self.disease.expose(neighbor)

    def compute_next(self):
        """
        Advance the simulation one day

        All decisions read yesterday's snapshot; only live hosts are
        written, so a host exposed earlier in today's scan cannot spread
        or progress until tomorrow.
        """
        previous = self.snapshot()

        for i in range(self._rows):
            for j in range(self._cols):
                prev = previous[i][j]
                cell = self.hosts[i][j]
                if self.disease.is_exposed(prev):
                    self.disease.worsen(cell)
                elif self.disease.is_infectious(prev):
                    self.disease.worsen(cell)
                    self.compute_contacts(i, j, prev.contact_radius)

        self.day += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Day %d: %d infected, %d recovered, %d deceased",
                         self.day, self.count_infected(),
                         self.count_recovered(), self.count_deceased())

    def count_infected(self) -> int:
        """Number of active infections (exposed or infectious)"""
        return sum(1 for host in self
                   if self.disease.is_exposed(host) or self.disease.is_infectious(host))

    def count_recovered(self) -> int:
        return sum(1 for host in self if self.disease.is_recovered(host))

    def count_deceased(self) -> int:
        return sum(1 for host in self if self.disease.is_deceased(host))

    def count_susceptible(self) -> int:
        return sum(1 for host in self if self.disease.is_susceptible(host))

    def get_state_counts(self) -> Dict[DiseaseState, int]:
        """Count hosts in each disease state"""
        counts = {state: 0 for state in DiseaseState}
        for host in self:
            counts[self.disease.classify(host)] += 1
        return counts

    def get_state_map(self) -> np.ndarray:
        """Get 2D array of disease states"""
        state_map = np.zeros((self._rows, self._cols), dtype=np.int8)
        for i, row in enumerate(self.hosts):
            for j, host in enumerate(row):
                state_map[i, j] = self.disease.classify(host)
        return state_map

    def render(self) -> str:
        """Text representation of the map, one character per host"""
        return "\n".join(
            "".join(STATE_CHARS.get(self.disease.classify(host), '!') for host in row)
            for row in self.hosts
        )

    def summary(self) -> str:
        """Aggregate totals for the map so far"""
        return (f"{self.count_deceased()} died, "
                f"{self.count_recovered()} recovered, "
                f"{self.count_infected()} still infected.")

    def plot_states(self, ax=None):
        """Plot host states as a categorical heatmap"""
        if ax is None:
            fig, ax = plt.subplots(figsize=(10, 8))

        states = list(DiseaseState)
        cmap = ListedColormap([STATE_COLORS[s] for s in states])
        norm = BoundaryNorm(np.arange(len(states) + 1) - 0.5, cmap.N)

        im = ax.imshow(self.get_state_map(), cmap=cmap, norm=norm, interpolation='nearest')
        ax.set_title(f'{self.disease.name}: day {self.day}', fontsize=14, fontweight='bold')
        ax.set_xlabel('Column', fontsize=12)
        ax.set_ylabel('Row', fontsize=12)

        cbar = plt.colorbar(im, ax=ax, ticks=range(len(states)))
        cbar.ax.set_yticklabels([s.name.title() for s in states])

        ax.grid(False)

        return ax

    def __repr__(self) -> str:
        return f"PopulationGrid({self._rows}x{self._cols}, day={self.day}, disease={self.disease.name!r})"


if __name__ == "__main__":
    # Test grid creation
    print("Population Grid Test")
    print("=" * 60)

    disease = DiseaseModel(seed=42)
    grid = PopulationGrid(disease, rows=40, cols=80, seed=42)
    grid.seed_disease(3)

    t = 0
    while grid.count_infected() > 0 and t < 1000:
        grid.compute_next()
        t += 1

    print(grid.render())
    print(f"\nAfter {t} days...")
    print(grid.summary())
