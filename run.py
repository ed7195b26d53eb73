#!/usr/bin/env python3
"""
Start auto-cc from a source checkout.

Arguments are handed to the session command line; with none, the tkinter
window opens.
"""

import sys
import os

# Import auto_cc from src/ without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))


def main():
    if len(sys.argv) > 1:
        from auto_cc.cli import main as cli_main

        sys.exit(cli_main())
    else:
        # No arguments: open the window
        from auto_cc.app import main as gui_main

        gui_main()


if __name__ == "__main__":
    main()
