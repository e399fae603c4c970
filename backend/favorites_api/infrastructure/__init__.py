"""Infrastructure Layer - database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every database failure leaves this layer as a StorageFailureError
"""
