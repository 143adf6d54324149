#!/usr/bin/env python3
"""
Main entry point for the watchmanlite CLI.

This delegates to the UI layer in watchmanlite.ui.cli to keep the
console script mapping stable.
"""

from watchmanlite.ui.cli import run as watchmanlite


if __name__ == "__main__":
    watchmanlite()
