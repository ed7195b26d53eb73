#!/usr/bin/env python3
"""
Automation Envelope to MIDI CC Mapping

Converts the automation envelopes of the selected tracks into MIDI CC lanes:
- Every non-empty envelope gets its own controller number, counted up from
  a base CC across all selected tracks
- Each selected track with envelopes gets one MIDI item on the target track
  covering the whole project
- Envelope values are clamped to [0, 1] and scaled to 0-127

The whole mapping is planned and validated before the project is touched.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .locator import TARGET_TRACK_NAME, ensure_track
from .models import CCEvent

MIDI_CHANNELS = 16
CC_MAX_VALUE = 127


class CCLaneCounter:
    """Run-scoped counter handing out CC lane offsets."""

    def __init__(self, start: int = 0):
        self.value = start

    def next(self) -> int:
        value = self.value
        self.value += 1
        return value


@dataclass
class LanePlan:
    """One envelope converted to CC values, not yet written to a take."""

    envelope_name: str
    controller: int
    channel: int
    times: List[float] = field(default_factory=list)
    values: List[int] = field(default_factory=list)
    clamped: int = 0


@dataclass
class TrackPlan:
    track: Any
    track_name: str
    lanes: List[LanePlan] = field(default_factory=list)

    @property
    def end_time(self) -> float:
        return max((t for lane in self.lanes for t in lane.times), default=0.0)


def scale_to_cc(values) -> np.ndarray:
    """
    Scale normalized envelope values to 7-bit CC values.

    Values are clamped to [0, 1] first and NaN counts as 0, so the result is
    always within 0-127.

    Args:
        values: Sequence of envelope values

    Returns:
        Integer array of CC values
    """
    arr = np.nan_to_num(np.asarray(values, dtype=float), nan=0.0)
    return np.floor(np.clip(arr, 0.0, 1.0) * CC_MAX_VALUE).astype(int)


def _count_out_of_range(values) -> int:
    arr = np.asarray(values, dtype=float)
    return int(np.count_nonzero(~((arr >= 0.0) & (arr <= 1.0))))


def plan_track_lanes(
    host, tracks: list, base_cc: int, counter: CCLaneCounter
) -> List[TrackPlan]:
    """
    Read the envelopes of tracks and assign a controller to each non-empty one.

    Envelopes without points are skipped and do not advance the counter.
    Tracks without any non-empty envelope produce no plan.
    """
    plans = []

    for track in tracks:
        plan = TrackPlan(track=track, track_name=host.track_name(track))

        for envelope in host.envelopes(track):
            points = host.envelope_points(envelope)
            if not points:
                continue

            offset = counter.next()
            raw_values = [p.value for p in points]
            plan.lanes.append(
                LanePlan(
                    envelope_name=host.envelope_name(envelope),
                    controller=base_cc + offset,
                    channel=offset % MIDI_CHANNELS,
                    times=[p.time for p in points],
                    values=scale_to_cc(raw_values).tolist(),
                    clamped=_count_out_of_range(raw_values),
                )
            )

        if plan.lanes:
            plans.append(plan)

    return plans


def validate_plans(plans: List[TrackPlan]) -> None:
    """Raise ValueError if any planned CC event is not a valid MIDI message."""
    for plan in plans:
        for lane in plan.lanes:
            for value in lane.values:
                try:
                    CCEvent(0, lane.channel, lane.controller, value).to_message()
                except ValueError as e:
                    raise ValueError(
                        f"Invalid CC for envelope '{lane.envelope_name}' on track "
                        f"'{plan.track_name}' (CC {lane.controller}): {e}"
                    ) from e


def map_envelopes_to_cc(
    host,
    base_cc: int,
    target_name: str = TARGET_TRACK_NAME,
    counter: Optional[CCLaneCounter] = None,
    verbose: bool = False,
) -> Tuple[bool, str, Dict[str, Any]]:
    """
    Map the automation envelopes of the selected tracks to MIDI CC events.

    Args:
        host: Project host
        base_cc: Controller number of the first envelope
        target_name: Name of the track receiving the MIDI items
        counter: Lane counter; a new one is used when None
        verbose: Whether to print progress messages

    Returns:
        Tuple of (success: bool, message: str, details: dict)
    """
    details: Dict[str, Any] = {
        "base_cc": base_cc,
        "target_created": False,
        "tracks_processed": 0,
        "tracks_skipped": 0,
        "items_created": 0,
        "clamped_points": 0,
        "lanes": [],
        "errors": [],
    }

    if counter is None:
        counter = CCLaneCounter()

    selected = host.selected_tracks()
    if not selected:
        return False, "No tracks selected.", details

    plans = plan_track_lanes(host, selected, base_cc, counter)
    details["tracks_skipped"] = len(selected) - len(plans)

    try:
        validate_plans(plans)
    except ValueError as e:
        return False, str(e), details

    target_track, created = ensure_track(host, target_name)
    details["target_created"] = created
    if verbose and created:
        print(f"Created track '{target_name}'")

    project_length = host.project_length()

    for plan in plans:
        end = max(project_length, plan.end_time)
        item = host.create_midi_item(target_track, 0.0, end)
        take = host.find_item_take(item)
        if take is None:
            # Roll back the item before reporting
            host.delete_item(target_track, item)
            details["errors"].append(f"Failed to get MIDI take for track '{plan.track_name}'.")
            continue

        for lane in plan.lanes:
            for time, value in zip(lane.times, lane.values):
                host.insert_cc(
                    take,
                    CCEvent(
                        ppq=host.ppq_from_project_time(take, time),
                        channel=lane.channel,
                        controller=lane.controller,
                        value=value,
                    ),
                )

            details["clamped_points"] += lane.clamped
            details["lanes"].append(
                {
                    "track": plan.track_name,
                    "envelope": lane.envelope_name,
                    "controller": lane.controller,
                    "channel": lane.channel,
                    "points": len(lane.values),
                }
            )
            if verbose:
                print(
                    f"  {plan.track_name} / {lane.envelope_name}: "
                    f"{len(lane.values)} points -> CC {lane.controller} (ch {lane.channel})"
                )

        host.sort_events(take)
        details["items_created"] += 1
        details["tracks_processed"] += 1

    host.update_arrange()

    if verbose and details["clamped_points"]:
        print(f"  Clamped {details['clamped_points']} out-of-range envelope values")

    message = (
        f"Mapped {len(details['lanes'])} envelope(s) from "
        f"{details['tracks_processed']} track(s) to CC"
    )
    return True, message, details
