"""
SEIRD Disease Model
===================
Per-host classification and state-transition rules for a communicable
disease. Classification is pure; transitions consume randomness through
the model's ``DiseaseDistributions``.
"""

import logging
from typing import Optional

import numpy as np

from .disease_params import DiseaseParameters, DiseaseDistributions
from .host import Host, DiseaseState

logger = logging.getLogger(__name__)


class DiseaseModel:
    """
    Communicable disease policy for the SEIRD grid model

    Stateless with respect to hosts: every transition mutates the ``Host``
    passed in. The only internal state is the random generator behind
    the samplers.
    """

    def __init__(self,
                 params: DiseaseParameters = None,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize disease model

        Args:
            params: Disease parameters (uses defaults if None)
            seed: Random seed for the samplers
            rng: Generator to draw from instead of seeding a new one
        """
        if params is None:
            params = DiseaseParameters()
        self.params = params
        self.distributions = DiseaseDistributions(params, seed=seed, rng=rng)

        if params.min_incubation < 1 or params.min_infection < 1:
            logger.debug("%s: zero-length countdowns advance on the following day",
                         params.name)

    @property
    def name(self) -> str:
        return self.params.name

    @property
    def rng(self) -> np.random.Generator:
        return self.distributions.rng

    # ------------------------------------------------------------------
    # Classification (no randomness)
    # ------------------------------------------------------------------

    def is_susceptible(self, host: Host) -> bool:
        return host.state == DiseaseState.SUSCEPTIBLE

    def is_exposed(self, host: Host) -> bool:
        return host.state == DiseaseState.EXPOSED

    def is_infectious(self, host: Host) -> bool:
        return host.state == DiseaseState.INFECTIOUS

    def has_run_course(self, host: Host) -> bool:
        return host.state == DiseaseState.RESOLVED

    def is_recovered(self, host: Host) -> bool:
        return host.state == DiseaseState.RECOVERED

    def is_deceased(self, host: Host) -> bool:
        return host.state == DiseaseState.DECEASED

    def is_detected(self, host: Host) -> bool:
        """Infectious and presenting symptoms (not used by the grid yet)"""
        return self.is_infectious(host) and host.days_remaining < self.params.avg_infection

    def classify(self, host: Host) -> DiseaseState:
        return DiseaseState(host.state)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def infect(self, host: Host):
        """
        Infect a host, starting its incubation countdown

        Not guarded: calling this on a host that is already infected
        re-arms its incubation countdown.
        """
        host.state = DiseaseState.EXPOSED
        host.days_remaining = self.incubation_period()

    def expose(self, host: Host):
        """Possibly infect a susceptible host (one transmission draw)"""
        if self.will_catch():
            self.infect(host)

    def worsen(self, host: Host):
        """
        Advance the infection of an exposed or infectious host by one day

        When the countdown runs out the host moves one state forward:
        EXPOSED becomes INFECTIOUS with a fresh infection countdown, and
        INFECTIOUS resolves to RECOVERED or DECEASED within this call.
        """
        host.days_remaining -= 1
        if host.days_remaining <= 0:
            host.state = DiseaseState(host.state + 1)
            if self.has_run_course(host):
                self.expire(host)
            else:
                host.days_remaining = self.infection_period()

    def expire(self, host: Host):
        """Resolve an infection: death with probability ``p_death``"""
        if self.will_die():
            self.kill(host)
        else:
            self.recover(host)

    def recover(self, host: Host):
        host.state = DiseaseState.RECOVERED

    def kill(self, host: Host):
        host.state = DiseaseState.DECEASED

    # ------------------------------------------------------------------
    # Sampling (each call consumes randomness)
    # ------------------------------------------------------------------

    def will_catch(self) -> bool:
        return self.distributions.will_catch()

    def will_die(self) -> bool:
        return self.distributions.will_die()

    def incubation_period(self) -> int:
        return self.distributions.incubation_period()

    def infection_period(self) -> int:
        return self.distributions.infection_period()

    def num_contacts(self) -> int:
        return self.distributions.num_contacts()

    def __repr__(self) -> str:
        return f"DiseaseModel(name={self.name!r}, R0~{self.params.R0_estimate:.2f})"
