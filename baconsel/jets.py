"""Jet selection based on loose and tight particle-flow jet identification."""

from __future__ import annotations

from .objects import Event, Jet

_TRACKER_ETA = 2.4


def _pass_pf_id(jet: Jet, max_fraction: float) -> bool:
    if jet.neu_em_frac > max_fraction or jet.neu_had_frac > max_fraction:
        return False
    if jet.n_particles < 2:
        return False
    if abs(jet.eta) < _TRACKER_ETA:
        if jet.ch_had_frac <= 0:
            return False
        if jet.ch_em_frac > max_fraction:
            return False
        if jet.n_charged < 1:
            return False
    return True


class JetLoader:
    """Holds an event's jets and the kinematics of the selected one."""

    def __init__(self) -> None:
        self.jets: tuple[Jet, ...] = ()
        self.reset()

    def reset(self) -> None:
        """Clear the selected jet's kinematics."""
        self.pt = 0.0
        self.eta = 0.0
        self.phi = 0.0
        self.m = 0.0

    def load(self, event: Event) -> None:
        """Take the jet collection of ``event``."""
        self.jets = tuple(event.jets)

    def select_single(self) -> bool:
        """Select exactly one loose jet; fail on none or more than one."""
        self.reset()
        passing = [jet for jet in self.jets if self.pass_loose(jet)]
        if len(passing) != 1:
            return False
        (chosen,) = passing
        self.pt, self.eta, self.phi, self.m = chosen.pt, chosen.eta, chosen.phi, chosen.mass
        return True

    def veto(self) -> bool:
        """True if any jet passes the veto identification."""
        return any(self.pass_veto(jet) for jet in self.jets)

    def pass_loose(self, jet: Jet) -> bool:
        """Loose jet identification (fractions up to 0.99)."""
        return _pass_pf_id(jet, 0.99)

    def pass_tight(self, jet: Jet) -> bool:
        """Tight jet identification (fractions up to 0.9)."""
        return _pass_pf_id(jet, 0.9)

    def pass_veto(self, jet: Jet) -> bool:
        """Veto identification; the same as the loose one."""
        return self.pass_loose(jet)

    def columns(self) -> dict[str, float]:
        """Output columns for the selected jet."""
        return {"pt_1": self.pt, "eta_1": self.eta, "phi_1": self.phi, "m_1": self.m}