"""Generator-level boson and decay lepton selection."""

from __future__ import annotations

from .lorentz import LorentzVector, from_pt_eta_phi_m
from .objects import Event, GenParticle

_BOSON_IDS = frozenset({23, 24, 25})
_NEUTRINO_IDS = frozenset({12, 14, 16})


def is_neutrino(particle: GenParticle) -> bool:
    """True for electron, muon and tau neutrinos and antineutrinos."""
    return abs(particle.pdg_id) in _NEUTRINO_IDS


class GenLoader:
    """Holds an event's generator particles and the selected boson and leptons."""

    def __init__(self) -> None:
        self.particles: tuple[GenParticle, ...] = ()
        self.reset()
        self.reset_recoil()

    def reset(self) -> None:
        """Clear the boson and lepton columns."""
        self.v_pt = 0.0
        self.v_eta = 0.0
        self.v_phi = 0.0
        self.v_m = 0.0
        self.v_id = 0
        self.pt1 = self.eta1 = self.phi1 = self.m1 = 0.0
        self.id1 = 0
        self.pt2 = self.eta2 = self.phi2 = self.m2 = 0.0
        self.id2 = 0

    def reset_recoil(self) -> None:
        """Clear the recoil column."""
        self.gen_w_lep_phi = 0.0

    def load(self, event: Event) -> None:
        """Take the generator particle collection of ``event``."""
        self.particles = tuple(event.gen_particles)

    def select_boson(self) -> None:
        """Find the last Z, W or Higgs boson and its two decay leptons.

        Raises ValueError when the event holds no such boson.
        """
        self.reset()
        boson: GenParticle | None = None
        boson_index = -10
        lep1: GenParticle | None = None
        lep2: GenParticle | None = None
        for index, particle in enumerate(self.particles):
            if abs(particle.pdg_id) in _BOSON_IDS:
                boson = particle
                boson_index = index
            if particle.parent == boson_index:
                daughter = particle if particle.status == 1 else self.status1(index)
                if lep1 is None:
                    lep1 = daughter
                else:
                    lep2 = daughter
        if boson is None:
            raise ValueError("no Z, W or Higgs boson among the generator particles")
        self.v_pt, self.v_eta, self.v_phi = boson.pt, boson.eta, boson.phi
        self.v_m, self.v_id = boson.mass, boson.pdg_id
        if lep1 is None or lep2 is None:
            return
        if lep2.pt > lep1.pt or is_neutrino(lep1):
            lep1, lep2 = lep2, lep1
        self.pt1, self.eta1, self.phi1 = lep1.pt, lep1.eta, lep1.phi
        self.m1, self.id1 = lep1.mass, lep1.pdg_id
        self.pt2, self.eta2, self.phi2 = lep2.pt, lep2.eta, lep2.phi
        self.m2, self.id2 = lep2.mass, lep2.pdg_id

    def status1(self, index: int) -> GenParticle:
        """Follow the decay chain below ``index`` to its first stable descendant.

        Assumes daughters follow their parents in the list. Returns the last
        descendant reached if none is stable; raises LookupError if there is none.
        """
        current = index
        found: GenParticle | None = None
        for i, particle in enumerate(self.particles):
            if particle.parent == current:
                found = particle
                if particle.status == 1:
                    break
                current = i
        if found is None:
            raise LookupError(f"generator particle {index} has no descendants")
        return found

    def fill_recoil(self, lepton: LorentzVector) -> None:
        """Azimuthal separation between the boson and ``lepton``."""
        self.reset_recoil()
        self.gen_w_lep_phi = self.boson().delta_phi(lepton)

    def boson(self) -> LorentzVector:
        """Four-vector of the selected boson."""
        return from_pt_eta_phi_m(self.v_pt, self.v_eta, self.v_phi, self.v_m)

    def columns(self) -> dict[str, float]:
        """Boson and lepton output columns."""
        return {
            "genvpt": self.v_pt,
            "genveta": self.v_eta,
            "genvphi": self.v_phi,
            "genvm": self.v_m,
            "genvid": self.v_id,
            "genpt_1": self.pt1,
            "geneta_1": self.eta1,
            "genphi_1": self.phi1,
            "genm_1": self.m1,
            "genid_1": self.id1,
            "genpt_2": self.pt2,
            "geneta_2": self.eta2,
            "genphi_2": self.phi2,
            "genm_2": self.m2,
            "genid_2": self.id2,
        }

    def recoil_columns(self) -> dict[str, float]:
        """Recoil output columns."""
        return {"genwlepphi": self.gen_w_lep_phi}