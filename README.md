# baconsel

Event selection for collider events. The package reads reconstructed events
(electrons, muons, taus, photons, jets, generator particles and event-level
information), applies object identification and vetoes, and produces one flat
row per selected event, which it can write as CSV.

It uses only the Python standard library and supports Python 3.10 and later.

## Modules

- `baconsel.lorentz` – an immutable `LorentzVector` (`px`, `py`, `pz`, `e`)
  with `pt()`, `eta()`, `phi()`, `m()`, `rotate_z()`, `delta_phi()` and `+`;
  constructors `from_pt_eta_phi_m` and `from_pt_eta_phi_e`; and a `Lepton`
  record whose charge `q` follows from its PDG id.
- `baconsel.objects` – dataclasses `Electron`, `Muon`, `Tau`, `Photon`, `Jet`,
  `GenParticle`, `EventInfo` and `Event`, the bit flags `MuonType`,
  `MuonSelector`, `ElectronType` and `TauDiscriminator`, and
  `event_from_dict`, which builds an `Event` from plain mappings and lists and
  raises `ValueError` on unknown keys or fields.
- `baconsel.electrons`, `baconsel.muons`, `baconsel.taus`,
  `baconsel.photons`, `baconsel.jets` – `ElectronLoader`, `MuonLoader`,
  `TauLoader`, `PhotonLoader` and `JetLoader`. Each takes one event's
  collection with `load(event)`, selects exactly one object passing the loose
  identification with `select_single()` (electrons take the pile-up density
  `rho`), reports whether any object passes the veto with `veto()`, and gives
  its output with `columns()`. `MuonLoader.select_dimuon()` selects exactly
  two tight muons whose pair has pt of at least 30 and a mass within 20 of
  91.2. `baconsel.electrons.effective_area` and
  `baconsel.taus.pass_anti_e_mva3` are available as plain functions.
- `baconsel.events` – `EvtLoader` matches trigger names against patterns
  with shell-style wildcards (`add_trigger`, `pass_trigger`), fills run, lumi,
  event number, the MET flavours and rho (`fill_event`), and computes recoil
  components, transverse masses and recoil angles against a lepton
  (`fill_recoil`).
- `baconsel.gen` – `GenLoader.select_boson()` finds the last Z, W or Higgs
  boson and its two decay products, following unstable daughters down to a
  stable descendant; it raises `ValueError` when there is no boson.
  `fill_recoil` gives the azimuthal separation between the boson and a lepton.
- `baconsel.muontauid` – cut-based muon identification and isolation
  (`pass_muon_id`, `pass_pf_muon_id`, `pass_tight_pf_muon_id`,
  `pass_muon_iso_pu`, `pass_muon_iso_pu_tau_had`, `muon_iso_pu`,
  `is_soft_muon`, `is_muon_fo`), tau identification (`pass_tau_id_mu`,
  `pass_tau_id`, `tau_id_electron`, `tau_id_electron_mva`), `delta_phi` and
  `projected_met`, working on the `IdMuon` and `PFTau` records.
- `baconsel.runner` – the selections and the command line.

## Selections

- `run_monojet(events, max_events, with_gen)` – events firing one of the MET
  triggers in `MONOJET_TRIGGERS`, with no veto tau, muon or electron, and
  exactly one loose jet. Rows hold the event columns and the jet's
  `pt_1`, `eta_1`, `phi_1`, `m_1`.
- `run_dimuon(events, max_events, with_gen)` – events with a tight di-muon Z
  candidate. Rows hold the event columns, the recoil columns and the pair's
  `pt_1`, `eta_1`, `phi_1`.
- `run_electron(events, max_events, with_gen)` – events with exactly one loose
  electron, with event, recoil and electron columns.

A `max_events` of `-1`, or one larger than the input, processes every event.
With `with_gen` set, generator boson and lepton columns are added (and, for
the di-muon and electron selections, `genwlepphi`). A progress line is printed
every 1000 events.

`read_events(path)` reads events stored one JSON object per line, with the
keys `info`, `electrons`, `muons`, `taus`, `photons`, `jets` and
`gen_particles`, whose entries use the field names of the dataclasses in
`baconsel.objects`; fired trigger names go in `info.triggers`.
`write_rows(rows, path)` writes rows as CSV with the first row's keys as the
header and returns the number of rows written.

```python
from baconsel.runner import read_events, run_dimuon, write_rows

events = read_events("events.jsonl")
rows = run_dimuon(events, max_events=-1, with_gen=False)
write_rows(rows, "output.csv")
```

Single events can be fed to the loaders directly:

```python
from baconsel.objects import event_from_dict
from baconsel.jets import JetLoader

event = event_from_dict({"jets": [{"pt": 120.0, "eta": 0.5, "n_particles": 5,
                                   "n_charged": 3, "ch_had_frac": 0.4}]})
jets = JetLoader()
jets.load(event)
if jets.select_single():
    print(jets.columns())
```

## Command line

```
baconsel SELECTION MAX_EVENTS INPUT GEN [-o OUTPUT]
```

`SELECTION` is `monojet`, `dimuon` or `electron`; `MAX_EVENTS` is the number
of events to process (`-1` for all); `INPUT` is a JSON-lines event file; `GEN`
is non-zero to add generator columns. The rows are written as CSV to
`Output.csv` unless `-o` names another file.

## What it does not do

- It does not read or write ROOT files; input is JSON lines and output is CSV.
- It has no electron identification beyond the loose MVA and veto cuts of
  `ElectronLoader`; there are no cut-based or MVA working-point electron
  identification functions.

## Tests

```
pip install -e ".[test]"
pytest
```