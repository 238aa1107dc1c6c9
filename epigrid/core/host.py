"""
Host Records
============
Per-cell host representation for the SEIRD grid model
"""

from dataclasses import dataclass
from enum import IntEnum


class DiseaseState(IntEnum):
    """Enumeration of disease states

    Ordered so that advancing a host by one step is ``state + 1``
    (EXPOSED → INFECTIOUS → RESOLVED).
    """
    SUSCEPTIBLE = 0
    EXPOSED = 1
    INFECTIOUS = 2
    RESOLVED = 3   # transient, resolved within the same call
    RECOVERED = 4
    DECEASED = 5


# States with no outgoing transitions
TERMINAL_STATES = frozenset({DiseaseState.RECOVERED, DiseaseState.DECEASED})

# States observable after any public call returns
OBSERVABLE_STATES = frozenset(DiseaseState) - {DiseaseState.RESOLVED}


@dataclass
class Host:
    """Individual host occupying one grid cell"""

    state: DiseaseState = DiseaseState.SUSCEPTIBLE

    # Countdown until the next transition, only meaningful while
    # EXPOSED (incubation) or INFECTIOUS (infection)
    days_remaining: int = 0

    # Expected contacts per day, drawn once per reset
    contact_radius: int = 0

    def copy(self) -> 'Host':
        """Independent copy of this record"""
        return Host(self.state, self.days_remaining, self.contact_radius)
