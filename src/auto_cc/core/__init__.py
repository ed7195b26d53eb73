# Core mapping pipeline: track lookup, envelope mapping, item merge

from .locator import TARGET_TRACK_NAME, ensure_track, get_track_by_name
from .mapper import CCLaneCounter, map_envelopes_to_cc, scale_to_cc
from .merger import combine_midi_items
from .runner import UNDO_DESCRIPTION, run_auto_cc

__all__ = [
    "TARGET_TRACK_NAME",
    "ensure_track",
    "get_track_by_name",
    "CCLaneCounter",
    "map_envelopes_to_cc",
    "scale_to_cc",
    "combine_midi_items",
    "UNDO_DESCRIPTION",
    "run_auto_cc",
]
