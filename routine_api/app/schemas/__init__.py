"""
Pydantic schema definitions for API payloads.

Each domain (users, tasks, tags, events, activities, invites) defines
its own request and response models.  Schemas are separated from the
stored documents to decouple API representation from persistence.
"""
