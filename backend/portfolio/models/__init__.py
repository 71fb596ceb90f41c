"""ORM Models — SQLAlchemy declarative models for all portfolio documents.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all/alembic
"""

from portfolio.models.user import User  # noqa: F401
from portfolio.models.project import Project  # noqa: F401
from portfolio.models.certificate import Certificate  # noqa: F401
from portfolio.models.skill import Skill  # noqa: F401
from portfolio.models.about import About  # noqa: F401
from portfolio.models.configuration import Configuration  # noqa: F401
from portfolio.models.contact_message import ContactMessage  # noqa: F401
