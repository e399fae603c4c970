"""ORM Models - SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model is imported here so Base.metadata is complete after `import favorites_api.models`
"""

from favorites_api.models.favorite import Favorite  # noqa: F401
