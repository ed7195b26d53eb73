#!/usr/bin/env python3
"""
Track lookup by display name.
"""

from typing import Optional, Tuple

TARGET_TRACK_NAME = "Target"


def get_track_by_name(host, name: str) -> Optional[object]:
    """
    Find a track by its exact (case-sensitive) name.

    Args:
        host: Project host to search
        name: Track name to look for

    Returns:
        The first track in index order with that name, None otherwise
    """
    for track in host.tracks():
        if host.track_name(track) == name:
            return track
    return None


def ensure_track(host, name: str = TARGET_TRACK_NAME) -> Tuple[object, bool]:
    """
    Find a track by name, creating it at the end of the track list if absent.

    Returns:
        Tuple of (track, created)
    """
    track = get_track_by_name(host, name)
    if track is not None:
        return track, False

    track = host.insert_track(len(host.tracks()))
    host.set_track_name(track, name)
    return track, True
