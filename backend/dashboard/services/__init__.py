"""Services Layer — invoice mutations and dashboard read queries.

Invariants:
    - Services own their persistence error policy: log, then raise a fixed-message error
    - Schema validation errors are never caught here

Design Decisions:
    - Writes and reads split into two handler classes, one file each
"""
