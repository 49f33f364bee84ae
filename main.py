#!/usr/bin/env python3
from __future__ import annotations

"""
Main entry point for the torrent client CLI.

Usage
-----
python main.py -v Spider Man -s year -o desc
python main.py -d Spider Man --movie_id 38423 --index 0
"""

import sys

from torrent_client.cli import main

if __name__ == "__main__":
    sys.exit(main())
