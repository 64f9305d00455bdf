#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
NewsFeed - top headlines reader
Launcher script
"""

import os
import sys
import subprocess


def main():
    """
    Start the NewsFeed application
    """
    current_dir = os.path.dirname(os.path.abspath(__file__))

    # Forward all command line arguments (e.g. --log-level DEBUG)
    cmd = [sys.executable, os.path.join(current_dir, "newsfeed", "main.py")]
    cmd.extend(sys.argv[1:])

    print("Starting NewsFeed...")
    print(f"Command: {' '.join(cmd)}")

    process = subprocess.Popen(cmd, cwd=current_dir)
    sys.exit(process.wait())


if __name__ == "__main__":
    main()
