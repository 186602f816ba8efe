"""
lan-party-tools - small utilities for LAN parties.

Show your network addresses, list the games of a Steam library, and carry
games between machines by backing them up and restoring them.
"""

from importlib.metadata import version as _version

__version__ = _version("lan-party-tools")
