#!/usr/bin/env python3
"""
Host interface used by the CC mapping pipeline.

A host owns the project data model: tracks, automation envelopes, media
items with their MIDI takes, and the undo history. Track, envelope, item
and take values returned by a host are opaque handles that are only passed
back into the same host.
"""

from contextlib import contextmanager
from typing import List, Optional, Tuple

from ..core.models import CCEvent, EnvelopePoint, NoteEvent, SysexEvent


class Host:
    """Abstract project host."""

    # Tracks
    def tracks(self) -> list:
        """All tracks in index order."""
        raise NotImplementedError

    def track_name(self, track) -> str:
        raise NotImplementedError

    def set_track_name(self, track, name: str) -> None:
        raise NotImplementedError

    def insert_track(self, index: int):
        """Insert a new, unnamed track at index and return it."""
        raise NotImplementedError

    def selected_tracks(self) -> list:
        """Selected tracks in selection order."""
        raise NotImplementedError

    # Envelopes
    def envelopes(self, track) -> list:
        raise NotImplementedError

    def envelope_name(self, envelope) -> str:
        raise NotImplementedError

    def envelope_points(self, envelope) -> List[EnvelopePoint]:
        raise NotImplementedError

    # Items and takes
    def project_length(self) -> float:
        raise NotImplementedError

    def create_midi_item(self, track, start: float, end: float):
        """Create an empty MIDI item on track covering [start, end)."""
        raise NotImplementedError

    def delete_item(self, track, item) -> None:
        raise NotImplementedError

    def items(self, track) -> list:
        raise NotImplementedError

    def item_span(self, item) -> Tuple[float, float]:
        """Return (position, length) in seconds."""
        raise NotImplementedError

    def active_take(self, item):
        raise NotImplementedError

    def take_is_midi(self, take) -> bool:
        raise NotImplementedError

    def ppq_from_project_time(self, take, seconds: float) -> int:
        raise NotImplementedError

    def project_time_from_ppq(self, take, ppq: float) -> float:
        raise NotImplementedError

    # MIDI events
    def insert_cc(self, take, event: CCEvent) -> None:
        raise NotImplementedError

    def insert_note(self, take, event: NoteEvent) -> None:
        raise NotImplementedError

    def insert_sysex(self, take, event: SysexEvent) -> None:
        raise NotImplementedError

    def get_ccs(self, take) -> List[CCEvent]:
        raise NotImplementedError

    def get_notes(self, take) -> List[NoteEvent]:
        raise NotImplementedError

    def get_sysex(self, take) -> List[SysexEvent]:
        raise NotImplementedError

    def sort_events(self, take) -> None:
        raise NotImplementedError

    def update_arrange(self) -> None:
        """Refresh the arrangement view. No-op for hosts without one."""

    # Undo
    def begin_undo(self) -> None:
        raise NotImplementedError

    def end_undo(self, description: str) -> None:
        raise NotImplementedError

    def abort_undo(self, description: str) -> None:
        """Close the current undo block and revert its changes."""
        raise NotImplementedError

    @contextmanager
    def undo_block(self, description: str):
        """Bracket all mutations in one undo point.

        If the body raises, the changes made so far are reverted before the
        exception propagates.
        """
        self.begin_undo()
        try:
            yield self
        except BaseException:
            self.abort_undo(description)
            raise
        self.end_undo(description)

    def find_item_take(self, item) -> Optional[object]:
        """Return the item's active take if it is a MIDI take."""
        take = self.active_take(item)
        if take is None or not self.take_is_midi(take):
            return None
        return take
