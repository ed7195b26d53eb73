#!/usr/bin/env python3
"""
Full automation-to-CC run: map envelopes, then merge the resulting items.
"""

from typing import Any, Dict, Optional

from ..ui import UserInterface, ask_base_cc
from .locator import TARGET_TRACK_NAME
from .mapper import CCLaneCounter, map_envelopes_to_cc
from .merger import combine_midi_items

UNDO_DESCRIPTION = "Map Audio Automation to MIDI CC for Each Envelope in Selected Tracks"


def run_auto_cc(
    host,
    ui: UserInterface,
    target_name: str = TARGET_TRACK_NAME,
    base_cc: Optional[int] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Map the selected tracks' envelopes to CC and merge the target track items.

    Both steps run inside one undo block. A failed step is reported through
    ui and does not stop the other step.

    Args:
        host: Project host
        ui: User interface for the prompt and error messages
        target_name: Name of the track receiving the CC data
        base_cc: First controller number; asked through ui when None
        verbose: Whether to print progress messages

    Returns:
        Dictionary with the base CC and the result of both steps
    """
    if base_cc is None:
        base_cc = ask_base_cc(ui)

    summary: Dict[str, Any] = {"base_cc": base_cc}

    with host.undo_block(UNDO_DESCRIPTION):
        if verbose:
            print(f"Mapping envelopes to CC (first CC: {base_cc})")

        success, message, details = map_envelopes_to_cc(
            host,
            base_cc,
            target_name=target_name,
            counter=CCLaneCounter(),
            verbose=verbose,
        )
        for error in details["errors"]:
            ui.show_error(error)
        if not success:
            ui.show_error(message)
        summary["mapping"] = {"success": success, "message": message, "details": details}

        success, message, details = combine_midi_items(
            host, target_name=target_name, verbose=verbose
        )
        if not success:
            ui.show_error(message)
        summary["merge"] = {"success": success, "message": message, "details": details}

    return summary
