import pytest

from auto_cc.core.models import EnvelopePoint
from auto_cc.host.memory import MemoryEnvelope, MemoryHost
from auto_cc.ui import UserInterface


class RecordingUI(UserInterface):
    """Answers the prompt with a fixed value and records messages."""

    def __init__(self, answer=None):
        self.answer = answer
        self.prompts = []
        self.errors = []
        self.infos = []

    def ask_text(self, title, caption, default=""):
        self.prompts.append((title, caption))
        return self.answer

    def show_error(self, message, title="Error"):
        self.errors.append(message)

    def show_info(self, message, title="Info"):
        self.infos.append(message)


def envelope(name, points):
    return MemoryEnvelope(name=name, points=[EnvelopePoint(t, v) for t, v in points])


@pytest.fixture
def host():
    return MemoryHost()


@pytest.fixture
def ui():
    return RecordingUI()


@pytest.fixture
def single_envelope_host():
    """One selected track with one three-point envelope."""
    host = MemoryHost()
    track = host.add_track("Synth", selected=True)
    track.envelopes.append(envelope("Volume", [(0.0, 0.0), (1.0, 1.0), (2.0, 0.5)]))
    return host
