#!/usr/bin/env python3
"""
commitgraph - commit history graph viewer

This is a convenience wrapper for running from the repo root.
The actual entry point is commitgraph.main:main (for pip install).
"""

from commitgraph.main import main

if __name__ == "__main__":
    main()
