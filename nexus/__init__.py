"""Nexus - project management dashboard core.

Derives notifications, stage progress and access decisions from live
snapshots of a hosted document store.
"""

__version__ = "1.0.0"
