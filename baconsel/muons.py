"""Muon selection: loose and tight identification, single and di-muon selection."""

from __future__ import annotations

from .lorentz import LorentzVector, from_pt_eta_phi_m
from .objects import Event, Muon, MuonSelector, MuonType

MUON_MASS = 0.105
Z_MASS = 91.2

_DIMUON_MIN_PT = 30.0
_DIMUON_MASS_WINDOW = 20.0


def _relative_iso(muon: Muon) -> float:
    """Pile-up corrected PF isolation in a 0.4 cone, relative to pt."""
    neutral = max(muon.gamma_iso04 + muon.neu_had_iso04 - 0.5 * muon.pu_iso04, 0.0)
    return (muon.ch_had_iso04 + neutral) / muon.pt


class MuonLoader:
    """Holds an event's muons and the kinematics of the selected muon or pair."""

    def __init__(self) -> None:
        self.muons: tuple[Muon, ...] = ()
        self.reset()

    def reset(self) -> None:
        """Clear the selected kinematics."""
        self.pt = 0.0
        self.eta = 0.0
        self.phi = 0.0
        self.m = 0.0

    def load(self, event: Event) -> None:
        """Take the muon collection of ``event``."""
        self.muons = tuple(event.muons)

    def select_single(self) -> bool:
        """Select exactly one loose muon; fail on none or more than one."""
        self.reset()
        passing = [mu for mu in self.muons if self.pass_loose(mu)]
        if len(passing) != 1:
            return False
        (chosen,) = passing
        self.pt, self.eta, self.phi = chosen.pt, chosen.eta, chosen.phi
        return True

    def select_dimuon(self) -> bool:
        """Select exactly two tight muons forming a Z candidate.

        The pair must have pt of at least 30 and a mass within 20 of the Z mass.
        """
        self.reset()
        passing = [mu for mu in self.muons if self.pass_tight(mu)]
        if len(passing) != 2:
            return False
        first, second = (
            from_pt_eta_phi_m(mu.pt, mu.eta, mu.phi, MUON_MASS) for mu in passing
        )
        pair = first + second
        if pair.pt() < _DIMUON_MIN_PT or abs(pair.m() - Z_MASS) > _DIMUON_MASS_WINDOW:
            return False
        self.pt, self.eta, self.phi, self.m = pair.pt(), pair.eta(), pair.phi(), pair.m()
        return True

    def veto(self) -> bool:
        """True if any muon passes the loose identification."""
        return any(self.pass_loose(mu) for mu in self.muons)

    def pass_loose(self, muon: Muon) -> bool:
        """Loose identification with relative isolation below 0.4."""
        if not muon.type_bits & (MuonType.GLOBAL | MuonType.TRACKER):
            return False
        if not muon.selector_bits & MuonSelector.ALL_ARBITRATED:
            return False
        if not muon.type_bits & MuonType.PF_MUON:
            return False
        if abs(muon.dz) > 1.0:
            return False
        return _relative_iso(muon) <= 0.4

    def pass_tight(self, muon: Muon) -> bool:
        """Tight identification with relative isolation below 0.15."""
        if not muon.type_bits & MuonType.GLOBAL:
            return False
        if abs(muon.dz) > 0.2 or abs(muon.d0) > 0.045:
            return False
        if muon.mu_nchi2 > 10:
            return False
        if muon.n_valid_hits < 1 or muon.n_match_stn < 2:
            return False
        if muon.n_pix_hits < 1 or muon.n_tk_layers < 6:
            return False
        if not muon.type_bits & MuonType.PF_MUON:
            return False
        return _relative_iso(muon) <= 0.15

    def muon(self) -> LorentzVector:
        """Four-vector of the selected muon."""
        return from_pt_eta_phi_m(self.pt, self.eta, self.phi, MUON_MASS)

    def dimuon(self) -> LorentzVector:
        """Four-vector of the selected muon pair."""
        return from_pt_eta_phi_m(self.pt, self.eta, self.phi, self.m)

    def columns(self) -> dict[str, float]:
        """Output columns for the selected muon."""
        return {"pt_1": self.pt, "eta_1": self.eta, "phi_1": self.phi}