"""
EventDesk - console event management over flat-file records.
"""

__version__ = "1.0.0"
