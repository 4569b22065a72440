"""Hadronic tau selection and the anti-electron MVA3 working points."""

from __future__ import annotations

from .objects import Event, Tau, TauDiscriminator

_ANTI_E_MVA3_CUTS: dict[str, tuple[float, ...]] = {
    "Loose": (
        0.835, 0.831, 0.849, 0.859, 0.873, 0.823, 0.85, 0.855,
        0.816, 0.861, 0.862, 0.847, 0.893, 0.82, 0.845, 0.851,
    ),
    "Medium": (
        0.933, 0.921, 0.944, 0.945, 0.918, 0.941, 0.981, 0.943,
        0.956, 0.947, 0.951, 0.95, 0.897, 0.958, 0.955, 0.942,
    ),
    "Tight": (
        0.96, 0.968, 0.971, 0.972, 0.969, 0.959, 0.981, 0.965,
        0.975, 0.972, 0.974, 0.971, 0.897, 0.971, 0.961, 0.97,
    ),
    "VeryTight": (
        0.978, 0.98, 0.982, 0.985, 0.977, 0.974, 0.989, 0.977,
        0.986, 0.983, 0.984, 0.983, 0.971, 0.987, 0.977, 0.981,
    ),
}
_N_CATEGORIES = 16


def pass_anti_e_mva3(category: int, raw: float, working_point: str) -> bool:
    """Anti-electron MVA3 decision for a category and working point name.

    Negative categories fail, categories beyond the table pass, and an
    unknown working point uses a threshold of zero.
    """
    if category < 0:
        return False
    if category >= _N_CATEGORIES:
        return True
    cuts = _ANTI_E_MVA3_CUTS.get(working_point)
    cut = cuts[category] if cuts is not None else 0.0
    return raw > cut


_LOOSE_BITS = (
    TauDiscriminator.MVA3_LOOSE_ELECTRON_REJECTION
    | TauDiscriminator.LOOSE_MUON_REJECTION
    | TauDiscriminator.DECAY_MODE_FINDING
)
_TIGHT_BITS = (
    TauDiscriminator.MVA3_MEDIUM_ELECTRON_REJECTION
    | TauDiscriminator.LOOSE_MUON_REJECTION
    | TauDiscriminator.DECAY_MODE_FINDING
)


def _has_all(tau: Tau, bits: TauDiscriminator) -> bool:
    return (tau.hps_disc & bits) == bits


class TauLoader:
    """Holds an event's taus and the kinematics of the selected one."""

    def __init__(self) -> None:
        self.taus: tuple[Tau, ...] = ()
        self.reset()

    def reset(self) -> None:
        """Clear the selected tau's kinematics."""
        self.pt = 0.0
        self.eta = 0.0
        self.phi = 0.0

    def load(self, event: Event) -> None:
        """Take the tau collection of ``event``."""
        self.taus = tuple(event.taus)

    def select_single(self) -> bool:
        """Select exactly one loose tau; fail on none or more than one."""
        self.reset()
        passing = [tau for tau in self.taus if self.pass_loose(tau)]
        if len(passing) != 1:
            return False
        (chosen,) = passing
        self.pt, self.eta, self.phi = chosen.pt, chosen.eta, chosen.phi
        return True

    def veto(self) -> bool:
        """True if any tau passes the veto identification."""
        return any(self.pass_veto(tau) for tau in self.taus)

    def pass_loose(self, tau: Tau) -> bool:
        """Loose lepton rejection, decay mode finding and isolation up to 3."""
        return _has_all(tau, _LOOSE_BITS) and tau.raw_iso3hits <= 3.0

    def pass_tight(self, tau: Tau) -> bool:
        """Medium electron rejection, decay mode finding and isolation up to 1.5."""
        return _has_all(tau, _TIGHT_BITS) and tau.raw_iso3hits <= 1.5

    def pass_veto(self, tau: Tau) -> bool:
        """Decay mode finding and isolation up to 5."""
        return (
            bool(tau.hps_disc & TauDiscriminator.DECAY_MODE_FINDING)
            and tau.raw_iso3hits <= 5.0
        )

    def columns(self) -> dict[str, float]:
        """Output columns for the selected tau."""
        return {"pt_1": self.pt, "eta_1": self.eta, "phi_1": self.phi}