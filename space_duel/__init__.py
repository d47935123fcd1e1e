"""
Space Duel

Two-player arcade space combat on a wraparound play field.
"""

import logging

# Package logger; main.py decides on handlers and levels
logger = logging.getLogger('space_duel')

__all__ = ['logger']
