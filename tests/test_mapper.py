"""Tests for mapping automation envelopes to MIDI CC lanes."""

import math

import pytest

from auto_cc.core.locator import get_track_by_name
from auto_cc.core.mapper import CCLaneCounter, map_envelopes_to_cc, scale_to_cc
from auto_cc.host.memory import MemoryHost

from conftest import envelope


def target_ccs(host, name="Target"):
    """All CC events on the target track, per item."""
    track = get_track_by_name(host, name)
    return [host.get_ccs(host.active_take(item)) for item in host.items(track)]


# ── scale_to_cc ─────────────────────────────────────────────────────


class TestScaleToCC:

    def test_normalized_values(self):
        assert scale_to_cc([0.0, 1.0, 0.5]).tolist() == [0, 127, 63]

    def test_out_of_range_values_are_clamped(self):
        assert scale_to_cc([-0.5, 1.5, 2.0]).tolist() == [0, 127, 127]

    def test_nan_counts_as_zero(self):
        assert scale_to_cc([math.nan]).tolist() == [0]

    def test_floor_not_round(self):
        # 0.999 * 127 = 126.87
        assert scale_to_cc([0.999]).tolist() == [126]


# ── map_envelopes_to_cc ─────────────────────────────────────────────


class TestSingleEnvelope:

    def test_three_points_become_three_ccs(self, single_envelope_host):
        host = single_envelope_host
        success, _, details = map_envelopes_to_cc(host, 16)

        assert success
        (ccs,) = target_ccs(host)
        assert len(ccs) == 3
        assert [e.controller for e in ccs] == [16, 16, 16]
        assert [e.value for e in ccs] == [0, 127, 63]
        assert [e.channel for e in ccs] == [0, 0, 0]
        assert details["lanes"] == [
            {"track": "Synth", "envelope": "Volume", "controller": 16, "channel": 0, "points": 3}
        ]

    def test_positions_use_time_conversion(self, single_envelope_host):
        host = single_envelope_host
        map_envelopes_to_cc(host, 16)

        track = get_track_by_name(host, "Target")
        take = host.active_take(host.items(track)[0])
        expected = [host.ppq_from_project_time(take, t) for t in (0.0, 1.0, 2.0)]
        assert [e.ppq for e in host.get_ccs(take)] == expected
        # 120 BPM, 960 PPQ
        assert expected == [0, 1920, 3840]

    def test_item_spans_whole_project(self, single_envelope_host):
        host = single_envelope_host
        host.tracks()[0].envelopes[0].points[-1].time = 6.0
        map_envelopes_to_cc(host, 16)

        track = get_track_by_name(host, "Target")
        (item,) = host.items(track)
        assert host.item_span(item) == (0.0, host.project_length())

    def test_creates_target_track(self, single_envelope_host):
        host = single_envelope_host
        _, _, details = map_envelopes_to_cc(host, 16)
        assert details["target_created"] is True
        assert host.track_name(host.tracks()[-1]) == "Target"

    def test_uses_custom_target_name(self, single_envelope_host):
        host = single_envelope_host
        map_envelopes_to_cc(host, 16, target_name="CC Lanes")
        assert get_track_by_name(host, "CC Lanes") is not None
        assert get_track_by_name(host, "Target") is None


class TestCounter:

    def test_counter_is_shared_across_tracks(self, host):
        for name in ("A", "B"):
            track = host.add_track(name, selected=True)
            track.envelopes.append(envelope("Pan", [(0.0, 0.5)]))

        map_envelopes_to_cc(host, 16)

        first, second = target_ccs(host)
        assert (first[0].controller, first[0].channel) == (16, 0)
        assert (second[0].controller, second[0].channel) == (17, 1)

    def test_each_envelope_gets_its_own_controller(self, host):
        track = host.add_track("A", selected=True)
        track.envelopes.append(envelope("Volume", [(0.0, 0.1)]))
        track.envelopes.append(envelope("Pan", [(0.0, 0.2)]))

        map_envelopes_to_cc(host, 20)

        (ccs,) = target_ccs(host)
        assert sorted(e.controller for e in ccs) == [20, 21]

    def test_track_without_envelopes_is_skipped(self, host):
        host.add_track("Empty", selected=True)
        track = host.add_track("B", selected=True)
        track.envelopes.append(envelope("Volume", [(0.0, 1.0)]))

        _, _, details = map_envelopes_to_cc(host, 16)

        assert details["tracks_skipped"] == 1
        assert details["items_created"] == 1
        (ccs,) = target_ccs(host)
        assert ccs[0].controller == 16

    def test_only_empty_track_creates_no_items(self, host):
        host.add_track("Empty", selected=True)
        map_envelopes_to_cc(host, 16)
        assert target_ccs(host) == []

    def test_empty_envelope_does_not_advance(self, host):
        track = host.add_track("A", selected=True)
        track.envelopes.append(envelope("Volume", []))
        track.envelopes.append(envelope("Pan", [(0.0, 0.5)]))

        map_envelopes_to_cc(host, 16)

        (ccs,) = target_ccs(host)
        assert ccs[0].controller == 16

    def test_channel_wraps_after_sixteen_lanes(self, host):
        track = host.add_track("A", selected=True)
        for i in range(17):
            track.envelopes.append(envelope(f"Param {i}", [(0.0, 0.5)]))

        map_envelopes_to_cc(host, 0)

        (ccs,) = target_ccs(host)
        last = max(ccs, key=lambda e: e.controller)
        assert (last.controller, last.channel) == (16, 0)

    def test_shared_counter_keeps_counting_between_runs(self, single_envelope_host):
        host = single_envelope_host
        counter = CCLaneCounter()
        map_envelopes_to_cc(host, 16, counter=counter)
        map_envelopes_to_cc(host, 16, counter=counter)

        controllers = [ccs[0].controller for ccs in target_ccs(host)]
        assert controllers == [16, 17]

    def test_fresh_counter_restarts_at_base(self, single_envelope_host):
        host = single_envelope_host
        map_envelopes_to_cc(host, 16)
        map_envelopes_to_cc(host, 16)

        controllers = [ccs[0].controller for ccs in target_ccs(host)]
        assert controllers == [16, 16]


class TestErrors:

    def test_no_selected_tracks(self, host):
        host.add_track("A")
        success, message, _ = map_envelopes_to_cc(host, 16)
        assert not success
        assert message == "No tracks selected."
        assert get_track_by_name(host, "Target") is None

    def test_controller_out_of_range_changes_nothing(self, host):
        track = host.add_track("A", selected=True)
        track.envelopes.append(envelope("Volume", [(0.0, 0.5)]))
        track.envelopes.append(envelope("Pan", [(0.0, 0.5)]))

        success, message, _ = map_envelopes_to_cc(host, 127)

        assert not success
        assert "CC 128" in message
        assert get_track_by_name(host, "Target") is None

    def test_out_of_range_values_are_counted(self, host):
        track = host.add_track("A", selected=True)
        track.envelopes.append(envelope("Volume", [(0.0, -0.5), (1.0, 1.5), (2.0, 0.5)]))

        _, _, details = map_envelopes_to_cc(host, 16)

        assert details["clamped_points"] == 2
        (ccs,) = target_ccs(host)
        assert [e.value for e in ccs] == [0, 127, 63]

    def test_invalid_take_is_rolled_back(self, host):
        class NoMidiFirstHost(MemoryHost):
            calls = 0

            def take_is_midi(self, take):
                self.calls += 1
                return self.calls > 1

        host = NoMidiFirstHost()
        for name in ("A", "B"):
            track = host.add_track(name, selected=True)
            track.envelopes.append(envelope("Volume", [(0.0, 0.5)]))

        success, _, details = map_envelopes_to_cc(host, 16)

        assert success
        assert details["errors"] == ["Failed to get MIDI take for track 'A'."]
        assert details["items_created"] == 1
        (ccs,) = target_ccs(host)
        # Controllers are assigned before items are created
        assert ccs[0].controller == 17

    @pytest.mark.parametrize("base_cc", [-1, 128])
    def test_invalid_base_cc(self, single_envelope_host, base_cc):
        success, _, _ = map_envelopes_to_cc(single_envelope_host, base_cc)
        assert not success
