#!/usr/bin/env python3
"""
In-memory project host.

Holds a complete project (tracks, envelopes, MIDI items, tempo map) in
plain dataclasses and implements the Host interface on top of it. Projects
can be loaded from and saved to a JSON session snapshot so the mapping can
be run outside a DAW.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..core.models import CCEvent, EnvelopePoint, NoteEvent, SysexEvent, TempoMarker
from ..core.timing import DEFAULT_PPQ, beats_to_seconds, seconds_to_beats
from .base import Host


@dataclass(eq=False)
class MemoryEnvelope:
    name: str
    points: List[EnvelopePoint] = field(default_factory=list)


@dataclass(eq=False)
class MemoryTake:
    """MIDI take. Positions of its events are PPQ relative to the item start."""

    item: Optional["MemoryItem"] = field(default=None, repr=False)
    ccs: List[CCEvent] = field(default_factory=list)
    notes: List[NoteEvent] = field(default_factory=list)
    sysex: List[SysexEvent] = field(default_factory=list)
    is_midi: bool = True


@dataclass(eq=False)
class MemoryItem:
    position: float
    length: float
    take: Optional[MemoryTake] = None

    @property
    def end(self) -> float:
        return self.position + self.length


@dataclass(eq=False)
class MemoryTrack:
    name: str = ""
    envelopes: List[MemoryEnvelope] = field(default_factory=list)
    items: List[MemoryItem] = field(default_factory=list)
    selected: bool = False


class MemoryHost(Host):
    """Project host backed by Python objects."""

    def __init__(
        self,
        tracks: Optional[List[MemoryTrack]] = None,
        tempo_map: Optional[List[TempoMarker]] = None,
        ppq: int = DEFAULT_PPQ,
    ):
        self.track_list: List[MemoryTrack] = list(tracks or [])
        self.tempo_map: List[TempoMarker] = list(tempo_map or [])
        self.ppq = ppq
        self.arrange_updates = 0

        # Undo/Redo stacks of (description, project state)
        self.undo_stack: List[Tuple[str, Any]] = []
        self.redo_stack: List[Tuple[str, Any]] = []
        self._undo_depth = 0
        self._undo_snapshot: Any = None

    # Tracks
    def tracks(self) -> List[MemoryTrack]:
        return list(self.track_list)

    def track_name(self, track: MemoryTrack) -> str:
        return track.name

    def set_track_name(self, track: MemoryTrack, name: str) -> None:
        track.name = name

    def insert_track(self, index: int) -> MemoryTrack:
        track = MemoryTrack()
        self.track_list.insert(index, track)
        return track

    def selected_tracks(self) -> List[MemoryTrack]:
        return [t for t in self.track_list if t.selected]

    def add_track(self, name: str, selected: bool = False) -> MemoryTrack:
        """Append a named track. Convenience for building projects."""
        track = MemoryTrack(name=name, selected=selected)
        self.track_list.append(track)
        return track

    # Envelopes
    def envelopes(self, track: MemoryTrack) -> List[MemoryEnvelope]:
        return list(track.envelopes)

    def envelope_name(self, envelope: MemoryEnvelope) -> str:
        return envelope.name

    def envelope_points(self, envelope: MemoryEnvelope) -> List[EnvelopePoint]:
        return list(envelope.points)

    # Items and takes
    def project_length(self) -> float:
        length = 0.0
        for track in self.track_list:
            for item in track.items:
                length = max(length, item.end)
            for envelope in track.envelopes:
                for point in envelope.points:
                    length = max(length, point.time)
        return length

    def create_midi_item(self, track: MemoryTrack, start: float, end: float) -> MemoryItem:
        item = MemoryItem(position=start, length=end - start)
        item.take = MemoryTake(item=item)
        track.items.append(item)
        return item

    def delete_item(self, track: MemoryTrack, item: MemoryItem) -> None:
        track.items = [i for i in track.items if i is not item]

    def items(self, track: MemoryTrack) -> List[MemoryItem]:
        return list(track.items)

    def item_span(self, item: MemoryItem) -> Tuple[float, float]:
        return item.position, item.length

    def active_take(self, item: MemoryItem) -> Optional[MemoryTake]:
        return item.take

    def take_is_midi(self, take: MemoryTake) -> bool:
        return take.is_midi

    def ppq_from_project_time(self, take: MemoryTake, seconds: float) -> int:
        start_beats = seconds_to_beats(take.item.position, self.tempo_map)
        beats = seconds_to_beats(seconds, self.tempo_map) - start_beats
        return int(round(beats * self.ppq))

    def project_time_from_ppq(self, take: MemoryTake, ppq: float) -> float:
        start_beats = seconds_to_beats(take.item.position, self.tempo_map)
        return beats_to_seconds(start_beats + ppq / self.ppq, self.tempo_map)

    # MIDI events
    def insert_cc(self, take: MemoryTake, event: CCEvent) -> None:
        event.to_message()
        take.ccs.append(copy.copy(event))

    def insert_note(self, take: MemoryTake, event: NoteEvent) -> None:
        event.to_message()
        take.notes.append(copy.copy(event))

    def insert_sysex(self, take: MemoryTake, event: SysexEvent) -> None:
        take.sysex.append(copy.copy(event))

    def get_ccs(self, take: MemoryTake) -> List[CCEvent]:
        return [copy.copy(e) for e in take.ccs]

    def get_notes(self, take: MemoryTake) -> List[NoteEvent]:
        return [copy.copy(e) for e in take.notes]

    def get_sysex(self, take: MemoryTake) -> List[SysexEvent]:
        return [copy.copy(e) for e in take.sysex]

    def sort_events(self, take: MemoryTake) -> None:
        take.ccs.sort(key=lambda e: e.ppq)
        take.notes.sort(key=lambda e: e.start_ppq)
        take.sysex.sort(key=lambda e: e.ppq)

    def update_arrange(self) -> None:
        self.arrange_updates += 1

    # Undo
    def _state(self):
        return copy.deepcopy((self.track_list, self.tempo_map))

    def _restore(self, state) -> None:
        tracks, tempo_map = copy.deepcopy(state)
        self.track_list = tracks
        self.tempo_map = tempo_map

    def begin_undo(self) -> None:
        if self._undo_depth == 0:
            self._undo_snapshot = self._state()
        self._undo_depth += 1

    def end_undo(self, description: str) -> None:
        if self._undo_depth == 0:
            raise RuntimeError("end_undo() without begin_undo()")
        self._undo_depth -= 1
        if self._undo_depth == 0:
            self.undo_stack.append((description, self._undo_snapshot))
            self.redo_stack.clear()
            self._undo_snapshot = None

    def abort_undo(self, description: str) -> None:
        if self._undo_depth == 0:
            raise RuntimeError("abort_undo() without begin_undo()")
        self._undo_depth -= 1
        if self._undo_depth == 0:
            self._restore(self._undo_snapshot)
            self._undo_snapshot = None

    @property
    def undo_history(self) -> List[str]:
        return [description for description, _ in self.undo_stack]

    def undo(self) -> Optional[str]:
        """Revert the last undo point. Returns its description."""
        if not self.undo_stack:
            return None
        description, state = self.undo_stack.pop()
        self.redo_stack.append((description, self._state()))
        self._restore(state)
        return description

    def redo(self) -> Optional[str]:
        if not self.redo_stack:
            return None
        description, state = self.redo_stack.pop()
        self.undo_stack.append((description, self._state()))
        self._restore(state)
        return description

    # Session snapshot
    def to_dict(self) -> Dict[str, Any]:
        return {
            "ppq": self.ppq,
            "tempo": [{"time": m.time, "bpm": m.bpm} for m in self.tempo_map],
            "tracks": [_track_to_dict(t) for t in self.track_list],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryHost":
        host = cls(
            tempo_map=[TempoMarker(float(m["time"]), float(m["bpm"])) for m in data.get("tempo", [])],
            ppq=int(data.get("ppq", DEFAULT_PPQ)),
        )
        for track_data in data.get("tracks", []):
            host.track_list.append(_track_from_dict(track_data))
        return host


def _track_to_dict(track: MemoryTrack) -> Dict[str, Any]:
    items = []
    for item in track.items:
        item_data: Dict[str, Any] = {"position": item.position, "length": item.length}
        take = item.take
        if take is not None:
            item_data["midi"] = take.is_midi
            item_data["ccs"] = [
                [e.ppq, e.channel, e.controller, e.value, e.selected, e.muted, e.chanmsg]
                for e in take.ccs
            ]
            item_data["notes"] = [
                [e.start_ppq, e.end_ppq, e.channel, e.pitch, e.velocity, e.selected, e.muted]
                for e in take.notes
            ]
            item_data["sysex"] = [
                [e.ppq, e.type, e.data.hex(), e.selected, e.muted] for e in take.sysex
            ]
        items.append(item_data)

    return {
        "name": track.name,
        "selected": track.selected,
        "envelopes": [
            {
                "name": env.name,
                "points": [
                    {
                        "time": p.time,
                        "value": p.value,
                        "shape": p.shape,
                        "tension": p.tension,
                        "selected": p.selected,
                    }
                    for p in env.points
                ],
            }
            for env in track.envelopes
        ],
        "items": items,
    }


def _point_from_data(data) -> EnvelopePoint:
    # Points may be written as [time, value] pairs for brevity
    if isinstance(data, (list, tuple)):
        return EnvelopePoint(float(data[0]), float(data[1]))
    return EnvelopePoint(
        time=float(data["time"]),
        value=float(data["value"]),
        shape=int(data.get("shape", 0)),
        tension=float(data.get("tension", 0.0)),
        selected=bool(data.get("selected", False)),
    )


def _checked(event, track: MemoryTrack):
    """Return event if it is valid MIDI, raise ValueError naming the track otherwise."""
    try:
        event.to_message()
    except ValueError as e:
        raise ValueError(f"Invalid MIDI event on track '{track.name}': {event} ({e})") from e
    return event


def _track_from_dict(data: Dict[str, Any]) -> MemoryTrack:
    track = MemoryTrack(name=data.get("name", ""), selected=bool(data.get("selected", False)))

    for env_data in data.get("envelopes", []):
        track.envelopes.append(
            MemoryEnvelope(
                name=env_data.get("name", ""),
                points=[_point_from_data(p) for p in env_data.get("points", [])],
            )
        )

    for item_data in data.get("items", []):
        item = MemoryItem(
            position=float(item_data.get("position", 0.0)),
            length=float(item_data.get("length", 0.0)),
        )
        take = MemoryTake(item=item, is_midi=bool(item_data.get("midi", True)))
        take.ccs = [_checked(CCEvent(*e), track) for e in item_data.get("ccs", [])]
        take.notes = [_checked(NoteEvent(*e), track) for e in item_data.get("notes", [])]
        take.sysex = [
            SysexEvent(e[0], e[1], bytes.fromhex(e[2]), *e[3:]) for e in item_data.get("sysex", [])
        ]
        item.take = take
        track.items.append(item)

    return track


def load_session(path: str) -> MemoryHost:
    """Load a JSON session snapshot into a MemoryHost.

    Args:
        path: Path to the session file

    Returns:
        MemoryHost holding the project
    """
    with open(path, "r", encoding="utf-8") as f:
        return MemoryHost.from_dict(json.load(f))


def save_session(host: MemoryHost, path: str) -> None:
    """Write the project held by host as a JSON session snapshot."""
    # Ensure output directory exists
    output_dir = os.path.dirname(path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(host.to_dict(), f, indent=2)
