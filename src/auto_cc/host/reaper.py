#!/usr/bin/env python3
"""
REAPER host adapter.

Wraps the Python ReaScript API (module ``reaper_python``, ``RPR_*``
functions). Functions with output parameters return a tuple of the return
value followed by every argument, so values are picked out by position.
"""

from typing import List, Optional, Tuple

from ..core.models import CCEvent, EnvelopePoint, NoteEvent, SysexEvent
from ..ui import UserInterface
from .base import Host

PROJECT = 0
NAME_BUFFER = 512
SYSEX_BUFFER = 4096


def _load_api():
    import reaper_python

    return reaper_python


def _is_null(handle) -> bool:
    """ReaScript returns null pointers as strings like '(MediaItem*)0x0000000000000000'."""
    if not handle:
        return True
    if isinstance(handle, str):
        return int(handle.rsplit("0x", 1)[-1], 16) == 0 if "0x" in handle else False
    return False


def _first(result):
    return result[0] if isinstance(result, tuple) else result


class ReaperHost(Host):
    """Host backed by the running REAPER instance."""

    def __init__(self, api=None):
        self.api = api if api is not None else _load_api()

    # Tracks
    def tracks(self) -> list:
        count = self.api.RPR_CountTracks(PROJECT)
        return [self.api.RPR_GetTrack(PROJECT, i) for i in range(count)]

    def track_name(self, track) -> str:
        result = self.api.RPR_GetSetMediaTrackInfo_String(track, "P_NAME", "", False)
        return result[3] if result[0] else ""

    def set_track_name(self, track, name: str) -> None:
        self.api.RPR_GetSetMediaTrackInfo_String(track, "P_NAME", name, True)

    def insert_track(self, index: int):
        self.api.RPR_InsertTrackAtIndex(index, True)
        return self.api.RPR_GetTrack(PROJECT, index)

    def selected_tracks(self) -> list:
        count = self.api.RPR_CountSelectedTracks(PROJECT)
        return [self.api.RPR_GetSelectedTrack(PROJECT, i) for i in range(count)]

    # Envelopes
    def envelopes(self, track) -> list:
        count = self.api.RPR_CountTrackEnvelopes(track)
        return [self.api.RPR_GetTrackEnvelope(track, i) for i in range(count)]

    def envelope_name(self, envelope) -> str:
        result = self.api.RPR_GetEnvelopeName(envelope, "", NAME_BUFFER)
        return result[2] if result[0] else ""

    def envelope_points(self, envelope) -> List[EnvelopePoint]:
        points = []
        for i in range(self.api.RPR_CountEnvelopePoints(envelope)):
            (ok, _, _, time, value, shape, tension, selected) = self.api.RPR_GetEnvelopePoint(
                envelope, i, 0, 0, 0, 0, 0
            )
            if ok:
                points.append(EnvelopePoint(time, value, shape, tension, bool(selected)))
        return points

    # Items and takes
    def project_length(self) -> float:
        return self.api.RPR_GetProjectLength(PROJECT)

    def create_midi_item(self, track, start: float, end: float):
        return _first(self.api.RPR_CreateNewMIDIItemInProj(track, start, end, False))

    def delete_item(self, track, item) -> None:
        self.api.RPR_DeleteTrackMediaItem(track, item)

    def items(self, track) -> list:
        count = self.api.RPR_CountTrackMediaItems(track)
        return [self.api.RPR_GetTrackMediaItem(track, i) for i in range(count)]

    def item_span(self, item) -> Tuple[float, float]:
        return (
            self.api.RPR_GetMediaItemInfo_Value(item, "D_POSITION"),
            self.api.RPR_GetMediaItemInfo_Value(item, "D_LENGTH"),
        )

    def active_take(self, item):
        take = self.api.RPR_GetActiveTake(item)
        return None if _is_null(take) else take

    def take_is_midi(self, take) -> bool:
        return bool(self.api.RPR_TakeIsMIDI(take))

    def ppq_from_project_time(self, take, seconds: float) -> int:
        return int(round(self.api.RPR_MIDI_GetPPQPosFromProjTime(take, seconds)))

    def project_time_from_ppq(self, take, ppq: float) -> float:
        return self.api.RPR_MIDI_GetProjTimeFromPPQPos(take, ppq)

    # MIDI events
    def _count_events(self, take) -> Tuple[int, int, int]:
        _, _, notes, ccs, sysex = self.api.RPR_MIDI_CountEvts(take, 0, 0, 0)
        return notes, ccs, sysex

    def insert_cc(self, take, event: CCEvent) -> None:
        event.to_message()
        self.api.RPR_MIDI_InsertCC(
            take, event.selected, event.muted, event.ppq,
            event.chanmsg, event.channel, event.controller, event.value,
        )

    def insert_note(self, take, event: NoteEvent) -> None:
        event.to_message()
        self.api.RPR_MIDI_InsertNote(
            take, event.selected, event.muted, event.start_ppq, event.end_ppq,
            event.channel, event.pitch, event.velocity, True,
        )

    def insert_sysex(self, take, event: SysexEvent) -> None:
        message = event.data.decode("latin-1")
        self.api.RPR_MIDI_InsertTextSysexEvt(
            take, event.selected, event.muted, event.ppq, event.type, message, len(event.data)
        )

    def get_ccs(self, take) -> List[CCEvent]:
        events = []
        for i in range(self._count_events(take)[1]):
            result = self.api.RPR_MIDI_GetCC(take, i, 0, 0, 0, 0, 0, 0, 0)
            ok, _, _, selected, muted, ppq, chanmsg, chan, msg2, msg3 = result
            if ok:
                events.append(
                    CCEvent(
                        int(round(ppq)), chan, msg2, msg3,
                        bool(selected), bool(muted), chanmsg,
                    )
                )
        return events

    def get_notes(self, take) -> List[NoteEvent]:
        events = []
        for i in range(self._count_events(take)[0]):
            result = self.api.RPR_MIDI_GetNote(take, i, 0, 0, 0, 0, 0, 0, 0)
            ok, _, _, selected, muted, start, end, chan, pitch, vel = result
            if ok:
                events.append(
                    NoteEvent(
                        int(round(start)), int(round(end)), chan, pitch, vel,
                        bool(selected), bool(muted),
                    )
                )
        return events

    def get_sysex(self, take) -> List[SysexEvent]:
        events = []
        for i in range(self._count_events(take)[2]):
            result = self.api.RPR_MIDI_GetTextSysexEvt(take, i, 0, 0, 0, 0, "", SYSEX_BUFFER)
            ok, _, _, selected, muted, ppq, evt_type, message = result[:8]
            if ok:
                events.append(
                    SysexEvent(
                        int(round(ppq)), evt_type, message.encode("latin-1"),
                        bool(selected), bool(muted),
                    )
                )
        return events

    def sort_events(self, take) -> None:
        self.api.RPR_MIDI_Sort(take)

    def update_arrange(self) -> None:
        self.api.RPR_UpdateArrange()

    # Undo
    def begin_undo(self) -> None:
        self.api.RPR_Undo_BeginBlock()

    def end_undo(self, description: str) -> None:
        self.api.RPR_Undo_EndBlock(description, -1)

    def abort_undo(self, description: str) -> None:
        self.api.RPR_Undo_EndBlock(description, -1)
        self.api.RPR_Undo_DoUndo2(PROJECT)


class ReaperUserInterface(UserInterface):
    """REAPER's GetUserInputs dialog and message boxes."""

    def __init__(self, api=None):
        self.api = api if api is not None else _load_api()

    def ask_text(self, title: str, caption: str, default: str = "") -> Optional[str]:
        result = self.api.RPR_GetUserInputs(title, 1, caption, default, NAME_BUFFER)
        if not result[0]:
            return None
        return result[4]

    def show_error(self, message: str, title: str = "Error") -> None:
        self.api.RPR_ShowMessageBox(message, title, 0)

    def show_info(self, message: str, title: str = "Info") -> None:
        self.api.RPR_ShowMessageBox(message, title, 0)
