"""Selection drivers that turn events into flat rows, and the command line."""

from __future__ import annotations

import argparse
import csv
import json
from collections.abc import Iterable, Iterator, Mapping, Sequence
from itertools import islice
from pathlib import Path
from typing import Any

from .electrons import ElectronLoader
from .events import EvtLoader
from .gen import GenLoader
from .jets import JetLoader
from .muons import MuonLoader
from .objects import Event, event_from_dict
from .photons import PhotonLoader
from .taus import TauLoader

MONOJET_TRIGGERS = (
    "HLT_MET80_Parked_v*",
    "HLT_MET80_Parked_v*",
    "HLT_MonoCentralPFJet80_PFMETnoMu105_NHEF0p95_v*",
    "HLT_MET100_HBHENoiseCleaned_v*",
    "HLT_MET120_HBHENoiseCleaned_v*",
)

_PROGRESS_EVERY = 1000


def read_events(path: str | Path) -> list[Event]:
    """Read events stored one JSON object per line; blank lines are skipped."""
    events = []
    with open(path, encoding="utf-8") as handle:
        for number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(f"{path}:{number}: invalid JSON: {exc.msg}") from exc
            events.append(event_from_dict(data))
    return events


def write_rows(rows: Iterable[Mapping[str, Any]], path: str | Path) -> int:
    """Write rows as CSV with the first row's keys as header; return the row count."""
    iterator = iter(rows)
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as handle:
        first = next(iterator, None)
        if first is None:
            return 0
        writer = csv.DictWriter(handle, fieldnames=list(first))
        writer.writeheader()
        writer.writerow(first)
        count = 1
        for row in iterator:
            writer.writerow(row)
            count += 1
    return count


def _limited(events: Iterable[Event], max_events: int) -> Iterator[tuple[int, Event]]:
    """Enumerate at most ``max_events`` events (all when -1), printing progress."""
    events = events if isinstance(events, Sequence) else list(events)
    total = len(events)
    if total < max_events or max_events == -1:
        max_events = total
    for index, event in enumerate(islice(events, max(max_events, 0))):
        if index % _PROGRESS_EVERY == 0:
            print(f"===> Processed {index} - Done : {index / max_events}")
        yield index, event


def run_monojet(events: Iterable[Event], max_events: int, with_gen: bool) -> list[dict[str, Any]]:
    """Triggered events with no leptons or taus and exactly one loose jet."""
    evt = EvtLoader()
    muons = MuonLoader()
    electrons = ElectronLoader()
    taus = TauLoader()
    PhotonLoader()
    jets = JetLoader()
    gen = GenLoader() if with_gen else None
    for name in MONOJET_TRIGGERS:
        evt.add_trigger(name)

    rows = []
    for _, event in _limited(events, max_events):
        evt.load(event)
        if not evt.pass_trigger():
            continue
        taus.load(event)
        if taus.veto():
            continue
        muons.load(event)
        if muons.veto():
            continue
        electrons.load(event)
        if electrons.veto(evt.rho):
            continue
        jets.load(event)
        if not jets.select_single():
            continue
        evt.fill_event()
        row = {**evt.columns(), **jets.columns()}
        if gen is not None:
            gen.load(event)
            gen.select_boson()
            row.update(gen.columns())
        rows.append(row)
    return rows


def run_dimuon(events: Iterable[Event], max_events: int, with_gen: bool) -> list[dict[str, Any]]:
    """Events with a tight di-muon Z candidate, with recoil quantities."""
    evt = EvtLoader()
    muons = MuonLoader()
    ElectronLoader()
    gen = GenLoader() if with_gen else None

    rows = []
    for _, event in _limited(events, max_events):
        muons.load(event)
        if not muons.select_dimuon():
            continue
        evt.load(event)
        evt.fill_event()
        lepton = muons.muon()
        evt.fill_recoil(lepton)
        row = {**evt.columns(), **evt.recoil_columns(), **muons.columns()}
        if gen is not None:
            gen.load(event)
            gen.select_boson()
            gen.fill_recoil(lepton)
            row.update(gen.columns())
            row.update(gen.recoil_columns())
        rows.append(row)
    return rows


def run_electron(events: Iterable[Event], max_events: int, with_gen: bool) -> list[dict[str, Any]]:
    """Events with exactly one loose electron, with recoil quantities."""
    evt = EvtLoader()
    MuonLoader()
    electrons = ElectronLoader()
    gen = GenLoader() if with_gen else None

    rows = []
    for _, event in _limited(events, max_events):
        evt.load(event)
        electrons.load(event)
        evt.fill_event()
        if not electrons.select_single(evt.rho):
            continue
        lepton = electrons.electron()
        evt.fill_recoil(lepton)
        row = {**evt.columns(), **evt.recoil_columns(), **electrons.columns()}
        if gen is not None:
            gen.load(event)
            gen.select_boson()
            gen.fill_recoil(lepton)
            row.update(gen.columns())
            row.update(gen.recoil_columns())
        rows.append(row)
    return rows


_SELECTIONS = {
    "monojet": run_monojet,
    "dimuon": run_dimuon,
    "electron": run_electron,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run a selection over a JSON-lines event file and write a CSV ntuple."""
    parser = argparse.ArgumentParser(
        prog="baconsel", description="Select events and write a flat ntuple."
    )
    parser.add_argument("selection", choices=sorted(_SELECTIONS))
    parser.add_argument("max_events", type=int, help="events to process; -1 for all")
    parser.add_argument("input", help="JSON-lines event file")
    parser.add_argument("gen", type=int, help="non-zero to fill generator columns")
    parser.add_argument("-o", "--output", default="Output.csv", help="CSV file to write")
    args = parser.parse_args(argv)

    events = read_events(args.input)
    rows = _SELECTIONS[args.selection](events, args.max_events, bool(args.gen))
    write_rows(rows, args.output)
    return 0