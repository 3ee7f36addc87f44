"""
Per-domain repository modules for database access.

These are the persistence collaborator of the visibility engine: plain
CRUD plus the snapshot read and the atomic reaction upsert.
"""
