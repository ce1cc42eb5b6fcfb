"""
Core enums shared across modules.

NOTE: These are NOT database models. For SQLAlchemy ORM models, see each module's database.py:
  - Company and its sub-entities → src/companies/database.py
  - Watchlist/WatchlistCompany → src/watchlists/database.py
  - ActivityLog → src/activity/database.py
  - UserProfile/AuthSession → src/users/database.py
  - ContactMessage → src/contact/database.py

Role tiers live with the access gate in src/access/rbac.py.
"""
from enum import Enum


class CompanyStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    STRUCK_OFF = "STRUCK_OFF"
    UNDER_LIQUIDATION = "UNDER_LIQUIDATION"


class ActivityType(str, Enum):
    SEARCH = "SEARCH"
    VIEW_PROFILE = "VIEW_PROFILE"
    EXPORT_DATA = "EXPORT_DATA"
    CREATE_WATCHLIST = "CREATE_WATCHLIST"
    ADD_TO_WATCHLIST = "ADD_TO_WATCHLIST"
    SAVE_SEARCH = "SAVE_SEARCH"
    DOWNLOAD_REPORT = "DOWNLOAD_REPORT"
    API_CALL = "API_CALL"


class RelationshipType(str, Enum):
    """Which side of a parent/subsidiary link the viewed company sits on."""
    PARENT_COMPANY = "PARENT_COMPANY"
    SUBSIDIARY_COMPANY = "SUBSIDIARY_COMPANY"


class ContactStatus(str, Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"
