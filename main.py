#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--size {1,2,4}] [--mines N] [--save-file PATH]
    python main.py load [--save-file PATH]
"""
from src.minesweeper.cli import main


if __name__ == "__main__":
    main()
