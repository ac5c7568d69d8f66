"""
Core infrastructure: configuration, logging, errors, persistence and
security helpers shared by every service.
"""
