"""FACE CHASE: dodge the chaser for as long as you can."""

__version__ = "0.1.0"
