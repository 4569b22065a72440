"""Photon selection with a basic cut-based identification."""

from __future__ import annotations

from .objects import Event, Photon

_MIN_PT = 15.0
_MAX_HOVERE = 0.05
_MAX_SIEIE = 0.01
_MAX_RELATIVE_ISO = 0.4


class PhotonLoader:
    """Holds an event's photons and the kinematics of the selected one."""

    def __init__(self) -> None:
        self.photons: tuple[Photon, ...] = ()
        self.reset()

    def reset(self) -> None:
        """Clear the selected photon's kinematics."""
        self.pt = 0.0
        self.eta = 0.0
        self.phi = 0.0

    def load(self, event: Event) -> None:
        """Take the photon collection of ``event``."""
        self.photons = tuple(event.photons)

    def select_single(self) -> bool:
        """Select exactly one loose photon; fail on none or more than one."""
        self.reset()
        passing = [photon for photon in self.photons if self.pass_loose(photon)]
        if len(passing) != 1:
            return False
        (chosen,) = passing
        self.pt, self.eta, self.phi = chosen.pt, chosen.eta, chosen.phi
        return True

    def veto(self) -> bool:
        """True if any photon passes the loose identification."""
        return any(self.pass_loose(photon) for photon in self.photons)

    def pass_loose(self, photon: Photon) -> bool:
        """Basic identification with a loose relative isolation requirement."""
        if photon.pt < _MIN_PT:
            return False
        if photon.hovere > _MAX_HOVERE:
            return False
        if photon.sieie > _MAX_SIEIE:
            return False
        total_iso = photon.ch_had_iso03 + photon.gamma_iso03 + photon.neu_had_iso03
        return total_iso / photon.pt <= _MAX_RELATIVE_ISO

    def columns(self) -> dict[str, float]:
        """Output columns for the selected photon."""
        return {"pt_1": self.pt, "eta_1": self.eta, "phi_1": self.phi}