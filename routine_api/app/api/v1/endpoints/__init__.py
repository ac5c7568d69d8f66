"""
Endpoint modules for API v1.

Each module defines an ``APIRouter`` for one resource; ``router.py``
mounts them under their prefixes.
"""
