"""Presentation Helpers — pure view-shaping code shared by routes and clients.

Invariants:
    - No module here touches the database or the network directly
"""
