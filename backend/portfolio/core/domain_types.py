"""Domain Types — enums for every closed set of values stored in the database.

Invariants:
    - All valid states encoded as Enums, no raw string matching in route code
    - Enum values equal the strings persisted in the DB and sent over the wire

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


class UserRole(str, Enum):
    """Admin manages users and content; editor manages content only."""
    ADMIN = "admin"
    EDITOR = "editor"


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class ProjectCategory(str, Enum):
    WEB = "web"
    MOBILE = "mobile"
    DESKTOP = "desktop"
    OTHER = "other"


class ProjectStatus(str, Enum):
    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    PLANNED = "planned"


class ReportType(str, Enum):
    FILE = "file"
    LINK = "link"


class CertificateCategory(str, Enum):
    COURSE = "course"
    WORKSHOP = "workshop"
    CERTIFICATION = "certification"
    AWARD = "award"
    OTHER = "other"


class SkillCategory(str, Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    DATABASE = "database"
    AI_ML = "ai-ml"
    CERTIFICATION = "certification"
    OTHER = "other"


class SkillGroup(str, Enum):
    TECHNICAL = "technical"
    SOFT = "soft"
    TOOLS = "tools"
    FRAMEWORKS = "frameworks"
    LANGUAGES = "languages"
    AI_ML = "ai-ml"
    OTHER = "other"


class SkillSource(str, Enum):
    MANUAL = "manual"
    CERTIFICATE = "certificate"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
