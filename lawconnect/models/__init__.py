"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Derived statistics columns are written only by services/recompute_aggregates.py

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from lawconnect.models.user import User  # noqa: F401
from lawconnect.models.case_post import CasePost  # noqa: F401
from lawconnect.models.bid import Bid  # noqa: F401
from lawconnect.models.review import Review  # noqa: F401
from lawconnect.models.lawyer_profile import LawyerProfile  # noqa: F401
