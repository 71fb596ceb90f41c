"""Core Layer — domain enums, the error hierarchy and token/password primitives.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No database or network I/O happens here
"""
