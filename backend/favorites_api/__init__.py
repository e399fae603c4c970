"""Favorites API Package - HTTP CRUD service for saved profile references.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
