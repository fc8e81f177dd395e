"""
Facility Store

Hierarchical consistency layer over a CouchDB-style document store holding
buildings, rooms, devices and device types.
"""

__version__ = "0.1.0"
