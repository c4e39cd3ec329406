#!/usr/bin/env python3
"""Convenience runner for the referee match analytics CLI.

Usage:
    python run.py --export-dir exports --workout-id <id>
"""
from referee_analytics.main import main

if __name__ == "__main__":
    raise SystemExit(main())
