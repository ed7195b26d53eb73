#!/usr/bin/env python3
"""
ReaScript entry point.

Load this file from REAPER (Actions > ReaScript > Load) to map the
automation envelopes of the selected tracks to MIDI CC on the 'Target'
track.
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from auto_cc.core.runner import run_auto_cc
from auto_cc.host.reaper import ReaperHost, ReaperUserInterface


def main(api=None):
    host = ReaperHost(api)
    ui = ReaperUserInterface(host.api)
    return run_auto_cc(host, ui)


if __name__ == "__main__":
    main()
