"""
airpad: wireless trackpad server
Replays pointer events from a handheld as native pointer input
"""

__version__ = "1.0.0"
__author__ = "airpad contributors"
