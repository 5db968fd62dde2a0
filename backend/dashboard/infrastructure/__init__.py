"""Infrastructure Layer — database sessions, logging and the cache boundary.

Invariants:
    - Infrastructure imports only errors from core/, never domain logic
    - Every database session rolls back on failure

Design Decisions:
    - One module per external collaborator (database, logs, framework cache)
"""
