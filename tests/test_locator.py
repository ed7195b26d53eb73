"""Tests for finding and creating tracks by name."""

from auto_cc.core.locator import ensure_track, get_track_by_name


class TestGetTrackByName:

    def test_finds_target_among_tracks(self, host):
        host.add_track("A")
        host.add_track("B")
        target = host.add_track("Target")
        assert get_track_by_name(host, "Target") is target

    def test_missing_name_returns_none(self, host):
        for name in ("A", "B", "Target"):
            host.add_track(name)
        assert get_track_by_name(host, "Missing") is None

    def test_empty_project(self, host):
        assert get_track_by_name(host, "Target") is None

    def test_match_is_case_sensitive(self, host):
        host.add_track("target")
        assert get_track_by_name(host, "Target") is None

    def test_first_match_wins(self, host):
        first = host.add_track("Target")
        host.add_track("Target")
        assert get_track_by_name(host, "Target") is first


class TestEnsureTrack:

    def test_existing_track_is_returned(self, host):
        existing = host.add_track("Target")
        track, created = ensure_track(host, "Target")
        assert track is existing
        assert created is False
        assert len(host.tracks()) == 1

    def test_creates_named_track_at_end(self, host):
        host.add_track("A")
        track, created = ensure_track(host, "Target")
        assert created is True
        assert host.tracks()[-1] is track
        assert host.track_name(track) == "Target"
