"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Write routes depend on require_editor (or require_admin); reads are public
"""
