"""Event-level quantities: triggers, missing energy and hadronic recoil."""

from __future__ import annotations

import math
from fnmatch import fnmatchcase

from .lorentz import LorentzVector, from_pt_eta_phi_m
from .objects import Event, EventInfo


class EvtLoader:
    """Holds an event's information and the event-level output columns."""

    def __init__(self) -> None:
        self.info = EventInfo()
        self.triggers: list[str] = []
        self.reset()
        self.reset_recoil()

    def reset(self) -> None:
        """Clear the event-level columns."""
        self.run = 0
        self.evt = 0
        self.lumi = 0
        self.met_value = 0.0
        self.met_phi = 0.0
        self.tk_met = 0.0
        self.tk_met_phi = 0.0
        self.mva_met = 0.0
        self.mva_met_phi = 0.0
        self.rho = 0.0

    def reset_recoil(self) -> None:
        """Clear the recoil columns."""
        self.u1 = 0.0
        self.u2 = 0.0
        self.tk_u1 = 0.0
        self.tk_u2 = 0.0
        self.mva_mt = 0.0
        self.mt = 0.0
        self.tk_mt = 0.0
        self.tk_u_dphi = 0.0
        self.u_dphi = 0.0

    def load(self, event: Event) -> None:
        """Take the event information of ``event``."""
        self.info = event.info

    def add_trigger(self, name: str) -> None:
        """Add a trigger name pattern (``*`` wildcards allowed) to the selection."""
        self.triggers.append(name)

    def pass_trigger(self, trigger: str | None = None) -> bool:
        """Whether the event fired ``trigger``, or any added trigger if none is given."""
        patterns = self.triggers if trigger is None else [trigger]
        return any(
            fnmatchcase(fired, pattern)
            for pattern in patterns
            for fired in self.info.triggers
        )

    def fill_event(self) -> None:
        """Copy the loaded event information into the output columns."""
        self.reset()
        info = self.info
        self.run = info.run_num
        self.lumi = info.lumi_sec
        self.evt = info.evt_num
        self.met_value = info.pf_met
        self.met_phi = info.pf_met_phi
        self.mva_met = info.mva_met_u
        self.mva_met_phi = info.mva_met_u_phi
        self.tk_met = info.trk_met
        self.tk_met_phi = info.trk_met_phi
        self.rho = info.rho_jet

    def fill_recoil(self, lepton: LorentzVector) -> None:
        """Compute recoil components, transverse masses and recoil angles."""
        self.reset_recoil()
        pf_met = self.met(0)
        tk_met = self.met(1)
        mva_met = self.met(3)
        u = self.recoil(lepton, pf_met)
        tk_u = self.recoil(lepton, tk_met)
        self.u1, self.u2 = u.px, u.py
        self.tk_u1, self.tk_u2 = tk_u.px, tk_u.py
        self.mt = (pf_met + lepton).m()
        self.mva_mt = (mva_met + lepton).m()
        self.tk_mt = (tk_met + lepton).m()
        self.u_dphi = u.rotate_z(lepton.phi()).delta_phi(lepton)
        self.tk_u_dphi = tk_u.rotate_z(lepton.phi()).delta_phi(lepton)

    def met(self, option: int) -> LorentzVector:
        """Missing energy vector: 0 PF, 1 track, 2 MVA, 3 unity MVA; otherwise zero."""
        info = self.info
        choices = {
            0: (info.pf_met, info.pf_met_phi),
            1: (info.trk_met, info.trk_met_phi),
            2: (info.mva_met, info.mva_met_phi),
            3: (info.mva_met_u, info.mva_met_u_phi),
        }
        if option not in choices:
            return LorentzVector()
        value, phi = choices[option]
        return from_pt_eta_phi_m(value, 0.0, phi, 0.0)

    def recoil(self, lepton: LorentzVector, met: LorentzVector) -> LorentzVector:
        """Hadronic recoil, expressed in the frame aligned with the lepton."""
        u = from_pt_eta_phi_m(lepton.pt(), 0.0, lepton.phi(), 0.0) + met
        return u.rotate_z(math.pi).rotate_z(-lepton.phi())

    def columns(self) -> dict[str, float]:
        """Event-level output columns."""
        return {
            "run": self.run,
            "lumi": self.lumi,
            "evt": self.evt,
            "met": self.met_value,
            "metphi": self.met_phi,
            "tkmet": self.tk_met,
            "tkmetphi": self.tk_met_phi,
            "mvamet": self.mva_met,
            "mvametphi": self.mva_met_phi,
            "rho": self.rho,
        }

    def recoil_columns(self) -> dict[str, float]:
        """Recoil output columns."""
        return {
            "u1": self.u1,
            "u2": self.u2,
            "tku1": self.tk_u1,
            "tku2": self.tk_u2,
            "mvamt": self.mva_mt,
            "mt": self.mt,
            "tkmt": self.tk_mt,
            "tkudphi": self.tk_u_dphi,
            "udphi": self.u_dphi,
        }