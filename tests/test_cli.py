"""Tests for the auto-cc command line."""

import json

from auto_cc import cli
from auto_cc.core.locator import get_track_by_name
from auto_cc.host.memory import load_session

SESSION = {
    "tracks": [
        {
            "name": "Pad",
            "selected": True,
            "envelopes": [{"name": "Volume", "points": [[0.0, 0.0], [2.0, 1.0]]}],
        },
        {
            "name": "Lead",
            "selected": False,
            "envelopes": [{"name": "Pan", "points": [[1.0, 0.5]]}],
        },
    ]
}


def write_session(tmp_path, data=SESSION):
    path = tmp_path / "song.json"
    path.write_text(json.dumps(data))
    return path


def merged_controllers(path):
    host = load_session(str(path))
    (item,) = host.items(get_track_by_name(host, "Target"))
    return sorted({e.controller for e in host.get_ccs(host.active_take(item))})


def test_maps_selected_tracks(tmp_path, capsys):
    path = write_session(tmp_path)

    assert cli.main([str(path), "--base-cc", "30"]) == 0

    output = tmp_path / "song_cc.json"
    assert merged_controllers(output) == [30]
    assert "Output saved to" in capsys.readouterr().out


def test_select_overrides_session(tmp_path):
    path = write_session(tmp_path)
    output = tmp_path / "mapped.json"

    assert cli.main([str(path), "-s", "Pad", "Lead", "-o", str(output)]) == 0

    assert merged_controllers(output) == [16, 17]


def test_unknown_track_warns(tmp_path, capsys):
    path = write_session(tmp_path)
    cli.main([str(path), "-s", "Pad", "Drums"])
    assert "Track not found: Drums" in capsys.readouterr().err


def test_missing_input(tmp_path, capsys):
    assert cli.main([str(tmp_path / "nope.json")]) == 1
    assert "Input file not found" in capsys.readouterr().err


def test_invalid_json(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{")
    assert cli.main([str(path)]) == 1
    assert "Could not load session" in capsys.readouterr().err


def test_invalid_midi_in_session(tmp_path, capsys):
    data = {
        "tracks": SESSION["tracks"]
        + [
            {
                "name": "Target",
                "items": [
                    {"position": 0.0, "length": 1.0, "ccs": [[0, 0, 16, 200, False, False]]}
                ],
            }
        ]
    }
    path = write_session(tmp_path, data)

    assert cli.main([str(path)]) == 1
    assert "Could not load session" in capsys.readouterr().err


def test_nothing_selected_fails(tmp_path, capsys):
    data = {"tracks": [{"name": "Pad", "envelopes": []}]}
    path = write_session(tmp_path, data)

    assert cli.main([str(path)]) == 1
    assert "No tracks selected." in capsys.readouterr().err
    assert not (tmp_path / "song_cc.json").exists()


def test_no_arguments_prints_help(capsys):
    assert cli.main([]) == 1
    assert "usage" in capsys.readouterr().out
