"""
slotbroker - Calendar availability backend for voice booking assistants.
"""

__version__ = "0.1.0"
