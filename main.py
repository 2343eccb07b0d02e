#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--difficulty {beginner,intermediate,expert}] [--seed N]
    python main.py --width 8 --height 8 --mines 10
"""
from src.minesweeper.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
