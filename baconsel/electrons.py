"""Electron selection: loose MVA identification and a cut-based veto."""

from __future__ import annotations

from typing import NamedTuple

from .lorentz import LorentzVector, from_pt_eta_phi_m
from .objects import Electron, ElectronType, Event

ELECTRON_MASS = 0.000511

_ECAL_GAP_LOW = 1.4442
_ECAL_GAP_HIGH = 1.566

# Reference MVA thresholds indexed by [pt bin][|eta| bin]:
# pt bins split at 10 GeV; eta bins split at 0.8 and 1.479.
_IDMVA_CUTS = (
    (0.470, 0.004, 0.295),
    (-0.340, -0.650, 0.600),
)

_EFFECTIVE_AREAS = (
    (1.0, 0.19),
    (1.479, 0.25),
    (2.0, 0.12),
    (2.2, 0.21),
    (2.3, 0.27),
    (2.4, 0.44),
)
_EFFECTIVE_AREA_FORWARD = 0.52


class _VetoCuts(NamedTuple):
    max_sieie: float
    min_d_phi_in: float
    min_d_eta_in: float
    max_hovere: float


_BARREL_VETO = _VetoCuts(0.01, 0.06, 0.004, 0.12)
_ENDCAP_VETO = _VetoCuts(0.03, 0.03, 0.007, 0.10)


def effective_area(eta: float) -> float:
    """Effective area used to subtract pile-up from neutral isolation."""
    abs_eta = abs(eta)
    for upper, area in _EFFECTIVE_AREAS:
        if abs_eta < upper:
            return area
    return _EFFECTIVE_AREA_FORWARD


class ElectronLoader:
    """Holds an event's electrons and the kinematics of the selected one."""

    def __init__(self) -> None:
        self.electrons: tuple[Electron, ...] = ()
        self.reset()

    def reset(self) -> None:
        """Clear the selected electron's kinematics."""
        self.pt = 0.0
        self.eta = 0.0
        self.phi = 0.0

    def load(self, event: Event) -> None:
        """Take the electron collection of ``event``."""
        self.electrons = tuple(event.electrons)

    def select_single(self, rho: float) -> bool:
        """Select exactly one loose electron; fail on none or more than one."""
        self.reset()
        passing = [e for e in self.electrons if self.pass_loose(e, rho)]
        if len(passing) != 1:
            return False
        (chosen,) = passing
        self.pt, self.eta, self.phi = chosen.pt, chosen.eta, chosen.phi
        return True

    def veto(self, rho: float) -> bool:
        """True if any electron passes the veto identification."""
        return any(self.pass_veto(e, rho) for e in self.electrons)

    def pass_veto(self, electron: Electron, rho: float) -> bool:
        """POG-style veto identification with pile-up corrected isolation."""
        abs_eta = abs(electron.sc_eta)
        if _ECAL_GAP_LOW < abs_eta < _ECAL_GAP_HIGH:
            return False
        if not electron.type_bits & ElectronType.ECAL_DRIVEN:
            return False
        if abs(electron.d0) > 0.02 or abs(electron.dz) > 0.1:
            return False
        if electron.n_missing_hits > 1 or electron.is_conv:
            return False

        area = effective_area(electron.sc_eta)
        iso = electron.ch_had_iso03 + max(
            electron.neu_had_iso03 + electron.gamma_iso03 - rho * area, 0.0
        )
        if iso > 0.15 * electron.pt:
            return False

        cuts = _BARREL_VETO if abs_eta <= _ECAL_GAP_LOW else _ENDCAP_VETO
        if electron.sieie > cuts.max_sieie:
            return False
        if abs(electron.d_phi_in) < cuts.min_d_phi_in:
            return False
        if abs(electron.d_eta_in) < cuts.min_d_eta_in:
            return False
        if electron.hovere > cuts.max_hovere:
            return False
        return abs(1.0 - electron.eoverp) <= 0.05 * electron.ecal_energy

    def pass_loose(self, electron: Electron, rho: float) -> bool:
        """Loose identification: impact parameters and a binned MVA threshold.

        ``rho`` is accepted for symmetry with :meth:`pass_veto`; the decision
        is fully made by the MVA threshold.
        """
        if electron.n_missing_hits > 1:
            return False
        if abs(electron.sip3d) >= 100 or abs(electron.d0) >= 0.5 or abs(electron.dz) >= 1.0:
            return False
        pt_bin = 1 if electron.pt_hzz4l > 10 else 0
        abs_eta = abs(electron.sc_eta)
        if abs_eta < 0.8:
            eta_bin = 0
        elif abs_eta < 1.479:
            eta_bin = 1
        else:
            eta_bin = 2
        return electron.mva > _IDMVA_CUTS[pt_bin][eta_bin]

    def electron(self) -> LorentzVector:
        """Four-vector of the selected electron."""
        return from_pt_eta_phi_m(self.pt, self.eta, self.phi, ELECTRON_MASS)

    def columns(self) -> dict[str, float]:
        """Output columns for the selected electron."""
        return {"pt_1": self.pt, "eta_1": self.eta, "phi_1": self.phi}