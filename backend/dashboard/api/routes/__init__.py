"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services)
    - Read routes send Cache-Control: no-store (data is fetched fresh per request)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
