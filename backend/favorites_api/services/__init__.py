"""Services Layer - repositories that turn operations into SQL.

Invariants:
    - Services never build HTTP responses; they return rows or raise FavoritesError
"""
