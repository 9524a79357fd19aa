"""Infrastructure Layer — database, entity store, security and observability.

Invariants:
    - Infrastructure never imports from core/ rule modules (only errors/types/protocols)
    - All SQLAlchemy failures mapped to DatabaseError (core/errors.py)

Design Decisions:
    - Thin wrappers over SQLAlchemy and stdlib crypto, one concern per module
"""
