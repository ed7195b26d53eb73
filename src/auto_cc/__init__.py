# Auto CC: map DAW automation envelopes to MIDI CC lanes

__version__ = "1.0.0"
