#!/usr/bin/env python3
"""
MIDI Item Merge Module

Combines every MIDI item on the target track into a single item spanning
all of them. Event positions are re-based onto the combined item, so items
that do not start at the same position keep their timing.
"""

import copy
from typing import Any, Dict, List, Tuple

from .locator import TARGET_TRACK_NAME, get_track_by_name


def _collect_events(host, takes: list) -> Tuple[List, List, List]:
    """Read all events of takes with their positions in project seconds.

    Returns:
        Tuple of (ccs, notes, sysex) lists of (event, time...) tuples
    """
    ccs, notes, sysex = [], [], []

    for take in takes:
        for event in host.get_ccs(take):
            ccs.append((event, host.project_time_from_ppq(take, event.ppq)))
        for event in host.get_notes(take):
            notes.append(
                (
                    event,
                    host.project_time_from_ppq(take, event.start_ppq),
                    host.project_time_from_ppq(take, event.end_ppq),
                )
            )
        for event in host.get_sysex(take):
            sysex.append((event, host.project_time_from_ppq(take, event.ppq)))

    return ccs, notes, sysex


def combine_midi_items(
    host,
    target_name: str = TARGET_TRACK_NAME,
    verbose: bool = False,
) -> Tuple[bool, str, Dict[str, Any]]:
    """
    Merge all MIDI items on the target track into one item.

    Args:
        host: Project host
        target_name: Name of the track whose items are merged
        verbose: Whether to print progress messages

    Returns:
        Tuple of (success: bool, message: str, details: dict)
    """
    details: Dict[str, Any] = {
        "items_merged": 0,
        "ccs": 0,
        "notes": 0,
        "sysex": 0,
        "position": None,
        "length": None,
    }

    target_track = get_track_by_name(host, target_name)
    if target_track is None:
        return False, f"No '{target_name}' track found.", details

    items = host.items(target_track)
    if not items:
        return False, f"No MIDI items found on '{target_name}' track.", details

    # Combined span of all items
    min_pos, max_pos = float("inf"), 0.0
    takes = []
    for item in items:
        pos, length = host.item_span(item)
        min_pos = min(min_pos, pos)
        max_pos = max(max_pos, pos + length)
        take = host.find_item_take(item)
        if take is not None:
            takes.append(take)

    ccs, notes, sysex = _collect_events(host, takes)

    # Nothing is created or deleted unless every event can be copied
    for event, *_ in ccs + notes:
        try:
            event.to_message()
        except ValueError as e:
            return False, f"Invalid MIDI event on '{target_name}' track: {event} ({e})", details

    combined_item = host.create_midi_item(target_track, min_pos, max_pos)
    combined_take = host.find_item_take(combined_item)
    if combined_take is None:
        host.delete_item(target_track, combined_item)
        return False, "Failed to create combined MIDI item.", details

    for event, time in ccs:
        event = copy.copy(event)
        event.ppq = host.ppq_from_project_time(combined_take, time)
        host.insert_cc(combined_take, event)

    for event, start, end in notes:
        event = copy.copy(event)
        event.start_ppq = host.ppq_from_project_time(combined_take, start)
        event.end_ppq = host.ppq_from_project_time(combined_take, end)
        host.insert_note(combined_take, event)

    for event, time in sysex:
        event = copy.copy(event)
        event.ppq = host.ppq_from_project_time(combined_take, time)
        host.insert_sysex(combined_take, event)

    host.sort_events(combined_take)

    # Delete in reverse index order so remaining indices stay valid
    for item in reversed(items):
        if item is not combined_item:
            host.delete_item(target_track, item)

    host.update_arrange()

    details.update(
        items_merged=len(items),
        ccs=len(ccs),
        notes=len(notes),
        sysex=len(sysex),
        position=min_pos,
        length=max_pos - min_pos,
    )

    if verbose:
        print(f"Merged {len(items)} item(s) on '{target_name}':")
        print(f"  - Span: {min_pos:.3f}s - {max_pos:.3f}s")
        print(f"  - CC events: {len(ccs)}")
        print(f"  - Note events: {len(notes)}")
        print(f"  - Sysex/text events: {len(sysex)}")

    return True, f"Merged {len(items)} MIDI item(s) into one", details
