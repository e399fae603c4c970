"""Database Metadata - declarative Base shared by models and test fixtures.

Invariants:
    - The favorites table itself is an external precondition in production
    - Tests materialize the same metadata with Base.metadata.create_all
"""
