#!/usr/bin/env python3
"""
Data models shared by the host adapters and the CC mapping pipeline.
"""

from dataclasses import dataclass

import mido

# Channel message status bytes on channel 0.
POLYTOUCH_STATUS = 0xA0
CC_STATUS = 0xB0
PROGRAM_STATUS = 0xC0
PRESSURE_STATUS = 0xD0
PITCHWHEEL_STATUS = 0xE0

# REAPER's text/sysex event type for a raw sysex message.
SYSEX_TYPE = -1


@dataclass
class EnvelopePoint:
    """A single automation breakpoint.

    Attributes:
        time: Project time in seconds
        value: Normalized envelope value (expected in [0.0, 1.0])
        shape: Host curve shape index
        tension: Curve tension for bezier shapes
        selected: Selection state in the host
    """

    time: float
    value: float
    shape: int = 0
    tension: float = 0.0
    selected: bool = False


@dataclass
class TempoMarker:
    """A tempo change at a project time.

    Attributes:
        time: Time in seconds
        bpm: BPM value from this marker onwards
    """

    time: float
    bpm: float

    @property
    def tempo(self) -> int:
        """Tempo in microseconds per beat."""
        return mido.bpm2tempo(self.bpm)


@dataclass
class CCEvent:
    """A channel message from a take's CC lane list.

    Besides Control Change the list holds poly aftertouch, program change,
    channel pressure and pitch bend. ``controller`` and ``value`` are the
    two data bytes of the message whatever its type.
    """

    ppq: int
    channel: int
    controller: int
    value: int
    selected: bool = False
    muted: bool = False
    chanmsg: int = CC_STATUS

    @property
    def status(self) -> int:
        return self.chanmsg | self.channel

    def to_message(self) -> mido.Message:
        """Build the mido message, raising ValueError for out-of-range data."""
        if self.chanmsg == CC_STATUS:
            return mido.Message(
                "control_change",
                channel=self.channel,
                control=self.controller,
                value=self.value,
                time=self.ppq,
            )
        if self.chanmsg == POLYTOUCH_STATUS:
            return mido.Message(
                "polytouch",
                channel=self.channel,
                note=self.controller,
                value=self.value,
                time=self.ppq,
            )
        if self.chanmsg == PROGRAM_STATUS:
            return mido.Message(
                "program_change", channel=self.channel, program=self.controller, time=self.ppq
            )
        if self.chanmsg == PRESSURE_STATUS:
            return mido.Message(
                "aftertouch", channel=self.channel, value=self.controller, time=self.ppq
            )
        if self.chanmsg == PITCHWHEEL_STATUS:
            # LSB in the first data byte, MSB in the second
            for data_byte in (self.controller, self.value):
                if not 0 <= data_byte <= 127:
                    raise ValueError("data byte must be in range 0..127")
            return mido.Message(
                "pitchwheel",
                channel=self.channel,
                pitch=((self.value << 7) | self.controller) - 8192,
                time=self.ppq,
            )
        raise ValueError(f"unsupported channel message 0x{self.chanmsg:02X}")


@dataclass
class NoteEvent:
    """A note with start and end positions inside a MIDI take."""

    start_ppq: int
    end_ppq: int
    channel: int
    pitch: int
    velocity: int
    selected: bool = False
    muted: bool = False

    def to_message(self) -> mido.Message:
        return mido.Message(
            "note_on",
            channel=self.channel,
            note=self.pitch,
            velocity=self.velocity,
            time=self.start_ppq,
        )


@dataclass
class SysexEvent:
    """A sysex or text event (REAPER text/sysex event types)."""

    ppq: int
    type: int
    data: bytes
    selected: bool = False
    muted: bool = False

    @property
    def is_sysex(self) -> bool:
        return self.type == SYSEX_TYPE
