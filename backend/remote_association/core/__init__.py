"""Core Layer — declarations, per-record state and pure correlation logic.

Invariants:
    - No module in core/ imports from services/, infrastructure/, or db/
    - No IO, no async: only the RemoteClient protocol declares async methods
"""
