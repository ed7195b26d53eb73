#!/usr/bin/env python3
"""
Tempo map conversions between project seconds and beats.

The in-memory host positions MIDI events in PPQ ticks relative to the start
of a take. Both directions walk the tempo map segment by segment so that
projects with several tempo changes convert correctly.
"""

from typing import List, Tuple

from .models import TempoMarker

DEFAULT_BPM = 120.0
DEFAULT_PPQ = 960


def _normalized_tempo_map(tempo_map: List[TempoMarker]) -> List[Tuple[float, float]]:
    """Return (time, bpm) pairs sorted by time, always starting at 0."""
    if not tempo_map:
        return [(0.0, DEFAULT_BPM)]

    markers = sorted((m.time, m.bpm) for m in tempo_map)
    if markers[0][0] > 0.0:
        # The first marker's tempo applies from the project start
        markers.insert(0, (0.0, markers[0][1]))
    return markers


def seconds_to_beats(seconds: float, tempo_map: List[TempoMarker]) -> float:
    """Convert a project time in seconds to a position in beats.

    Args:
        seconds: Time position in seconds
        tempo_map: Tempo markers of the project

    Returns:
        Position in (fractional) beats from the project start
    """
    markers = _normalized_tempo_map(tempo_map)

    beats = 0.0
    for i, (start, bpm) in enumerate(markers):
        end = markers[i + 1][0] if i + 1 < len(markers) else None
        beats_per_second = bpm / 60.0

        if end is None or seconds < end:
            return beats + (seconds - start) * beats_per_second

        beats += (end - start) * beats_per_second

    return beats


def beats_to_seconds(beats: float, tempo_map: List[TempoMarker]) -> float:
    """Convert a position in beats back to project seconds."""
    markers = _normalized_tempo_map(tempo_map)

    elapsed_beats = 0.0
    for i, (start, bpm) in enumerate(markers):
        end = markers[i + 1][0] if i + 1 < len(markers) else None
        seconds_per_beat = 60.0 / bpm

        if end is None:
            return start + (beats - elapsed_beats) * seconds_per_beat

        segment_beats = (end - start) / seconds_per_beat
        if beats < elapsed_beats + segment_beats:
            return start + (beats - elapsed_beats) * seconds_per_beat

        elapsed_beats += segment_beats

    return 0.0
