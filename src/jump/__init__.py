"""
jump - Core Package

A directory jump assistant that learns which directories you visit and
resolves partial names or patterns to the best known match.
"""

__version__ = "0.1.0"
__author__ = "jump developers"
