"""Database Package — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Engine and sessions live in infrastructure/database.py, never here

Design Decisions:
    - asyncpg driver for PostgreSQL: native async, no thread pool overhead
"""
