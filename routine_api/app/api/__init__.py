"""
API package containing versioned routes.

A version subpackage exposes a top‑level ``router`` which includes all
of its resource routers.  New versions get their own subpackage (e.g.
``v2``) with its own ``router``.
"""
