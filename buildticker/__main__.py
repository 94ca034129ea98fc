#!/usr/bin/env python3
"""
Entry point for running as module: python -m buildticker
"""

from buildticker.cli import app


if __name__ == "__main__":
    app(prog_name="buildticker")
