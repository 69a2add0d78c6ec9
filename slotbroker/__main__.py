#!/usr/bin/env python3
"""
Convenience entry point for running slotbroker directly.

Usage: python -m slotbroker [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
