import math

import pytest

from baconsel.lorentz import (
    Lepton,
    LorentzVector,
    from_pt_eta_phi_e,
    from_pt_eta_phi_m,
)


@pytest.mark.parametrize(
    "pt, eta, phi, m",
    [(25.0, 0.3, 1.2, 0.105), (40.0, -1.7, -2.5, 91.2), (5.0, 2.2, 3.0, 0.0)],
)
def test_pt_eta_phi_m_round_trip(pt, eta, phi, m):
    vec = from_pt_eta_phi_m(pt, eta, phi, m)
    assert vec.pt() == pytest.approx(pt)
    assert vec.eta() == pytest.approx(eta)
    assert vec.phi() == pytest.approx(phi)
    assert vec.m() == pytest.approx(m, abs=1e-6)


def test_pt_eta_phi_e_keeps_energy():
    vec = from_pt_eta_phi_e(10.0, 0.5, -1.0, 50.0)
    assert vec.e == 50.0
    assert vec.pt() == pytest.approx(10.0)
    assert vec.eta() == pytest.approx(0.5)


def test_negative_pt_uses_magnitude():
    vec = from_pt_eta_phi_m(-3.0, 0.0, 0.0, 0.0)
    assert vec.pt() == pytest.approx(3.0)


def test_zero_vector_angles():
    vec = LorentzVector()
    assert vec.eta() == 0.0
    assert vec.phi() == 0.0
    assert vec.m() == 0.0


def test_eta_along_beam_is_large_with_sign():
    up = LorentzVector(0.0, 0.0, 5.0, 5.0)
    down = LorentzVector(0.0, 0.0, -5.0, 5.0)
    assert up.eta() > 1e9
    assert down.eta() == -up.eta()


def test_spacelike_mass_is_negative():
    vec = LorentzVector(3.0, 4.0, 0.0, 0.0)
    assert vec.m() < 0.0
    assert vec.m() == pytest.approx(-vec.pt())


def test_addition_sums_components():
    a = LorentzVector(1.0, 2.0, 3.0, 4.0)
    b = LorentzVector(0.5, -1.0, 2.0, 1.0)
    total = a + b
    assert (total.px, total.py, total.pz, total.e) == (1.5, 1.0, 5.0, 5.0)


def test_back_to_back_massless_pair_mass():
    a = from_pt_eta_phi_m(5.0, 0.0, 0.0, 0.0)
    b = from_pt_eta_phi_m(5.0, 0.0, math.pi, 0.0)
    assert (a + b).m() == pytest.approx(10.0)
    assert (a + b).pt() == pytest.approx(0.0, abs=1e-9)


def test_add_rejects_other_types():
    with pytest.raises(TypeError):
        LorentzVector() + 1.0


def test_rotate_z_quarter_turn():
    vec = LorentzVector(1.0, 0.0, 2.0, 3.0).rotate_z(math.pi / 2)
    assert vec.px == pytest.approx(0.0, abs=1e-12)
    assert vec.py == pytest.approx(1.0)
    assert vec.pz == 2.0
    assert vec.e == 3.0


def test_rotate_z_preserves_pt_and_mass():
    vec = from_pt_eta_phi_m(30.0, 1.1, 0.4, 5.0)
    rotated = vec.rotate_z(2.3)
    assert rotated.pt() == pytest.approx(vec.pt())
    assert rotated.m() == pytest.approx(vec.m())
    assert math.cos(rotated.phi()) == pytest.approx(math.cos(vec.phi() + 2.3))


def test_delta_phi_wraps_into_range():
    a = from_pt_eta_phi_m(1.0, 0.0, 3.0, 0.0)
    b = from_pt_eta_phi_m(1.0, 0.0, -3.0, 0.0)
    dphi = a.delta_phi(b)
    assert -math.pi <= dphi < math.pi
    assert math.cos(dphi) == pytest.approx(math.cos(6.0))
    assert math.sin(dphi) == pytest.approx(math.sin(6.0))


def test_delta_phi_antisymmetric():
    a = from_pt_eta_phi_m(1.0, 0.0, 0.7, 0.0)
    b = from_pt_eta_phi_m(1.0, 0.0, -0.2, 0.0)
    assert a.delta_phi(b) == pytest.approx(-b.delta_phi(a))


def test_default_lepton():
    lep = Lepton()
    assert lep.pdg_id == 0
    assert lep.q == 0
    assert lep.iso == -1.0
    assert lep.p4 == LorentzVector()


@pytest.mark.parametrize("pdg_id, charge", [(13, -1), (11, -1), (-13, 1), (-11, 1)])
def test_lepton_charge_from_pdg_id(pdg_id, charge):
    lep = Lepton(object(), pdg_id)
    assert lep.q == charge
    assert lep.fsrp4 == LorentzVector()