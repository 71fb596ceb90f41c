"""Services — query helpers and background jobs shared by the route modules.

Invariants:
    - Services never import from api/ (routes depend on services, not the reverse)
"""
