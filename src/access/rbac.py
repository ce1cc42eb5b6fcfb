"""
Role-based access control for company data sections and actions.

Roles form a strict tier order (FREEMIUM < PREMIUM < ENTERPRISE < ADMIN).
Each section and action declares the lowest tier that may use it, and the
visibility tables below are derived from those minimums, so a higher tier
always sees everything a lower tier sees.

Every function here is pure and total: unknown or missing roles resolve to
FREEMIUM, never to wider access.
"""
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Union


class UserRole(str, Enum):
    FREEMIUM = "FREEMIUM"
    PREMIUM = "PREMIUM"
    ENTERPRISE = "ENTERPRISE"
    ADMIN = "ADMIN"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)


_TIER_ORDER = [UserRole.FREEMIUM, UserRole.PREMIUM, UserRole.ENTERPRISE, UserRole.ADMIN]


class AccessLevel(str, Enum):
    # Company data sections
    BASIC_INFO = "basic_info"
    ADDRESS_CONTACT = "address_contact"
    KEY_OFFICIALS = "key_officials"
    FINANCIAL_INFO = "financial_info"
    FINANCIAL_METRICS = "financial_metrics"
    FUNDING_INVESTMENTS = "funding_investments"
    REGULATORY_LEGAL = "regulatory_legal"
    NEWS_RELATIONSHIPS = "news_relationships"

    # Actions
    CREATE_COMPANY = "create_company"
    UPDATE_COMPANY = "update_company"
    DELETE_COMPANY = "delete_company"
    VIEW_COMPANY = "view_company"
    EXPORT_DATA = "export_data"
    USE_WATCHLIST = "use_watchlist"
    COMPARE_COMPANIES = "compare_companies"
    MARKET_ANALYSIS = "market_analysis"


# Lowest tier allowed to see each section (declaration order = display order)
SECTION_MIN_TIER: Dict[AccessLevel, UserRole] = {
    AccessLevel.BASIC_INFO: UserRole.FREEMIUM,
    AccessLevel.ADDRESS_CONTACT: UserRole.FREEMIUM,
    AccessLevel.KEY_OFFICIALS: UserRole.PREMIUM,
    AccessLevel.FINANCIAL_INFO: UserRole.PREMIUM,
    AccessLevel.FINANCIAL_METRICS: UserRole.PREMIUM,
    AccessLevel.FUNDING_INVESTMENTS: UserRole.ENTERPRISE,
    AccessLevel.REGULATORY_LEGAL: UserRole.ENTERPRISE,
    AccessLevel.NEWS_RELATIONSHIPS: UserRole.ENTERPRISE,
}

# Lowest tier allowed to perform each action
ACTION_MIN_TIER: Dict[AccessLevel, UserRole] = {
    AccessLevel.VIEW_COMPANY: UserRole.FREEMIUM,
    AccessLevel.USE_WATCHLIST: UserRole.FREEMIUM,
    AccessLevel.EXPORT_DATA: UserRole.PREMIUM,
    AccessLevel.COMPARE_COMPANIES: UserRole.ENTERPRISE,
    AccessLevel.MARKET_ANALYSIS: UserRole.ENTERPRISE,
    AccessLevel.CREATE_COMPANY: UserRole.ADMIN,
    AccessLevel.UPDATE_COMPANY: UserRole.ADMIN,
    AccessLevel.DELETE_COMPANY: UserRole.ADMIN,
}

SECTIONS: List[dict] = [
    {"id": "basic", "name": "Basic Info", "access_level": AccessLevel.BASIC_INFO},
    {"id": "address", "name": "Address & Contact", "access_level": AccessLevel.ADDRESS_CONTACT},
    {"id": "officials", "name": "Key Officials", "access_level": AccessLevel.KEY_OFFICIALS},
    {"id": "financial", "name": "Financial Info", "access_level": AccessLevel.FINANCIAL_INFO},
    {"id": "metrics", "name": "Financial Metrics", "access_level": AccessLevel.FINANCIAL_METRICS},
    {"id": "funding", "name": "Funding & Investments", "access_level": AccessLevel.FUNDING_INVESTMENTS},
    {"id": "regulatory", "name": "Regulatory & Legal", "access_level": AccessLevel.REGULATORY_LEGAL},
    {"id": "news", "name": "News & Relationships", "access_level": AccessLevel.NEWS_RELATIONSHIPS},
]

# Company-form step unlocked by each section (financial info and metrics share step 4)
_SECTION_STEP: Dict[AccessLevel, int] = {
    AccessLevel.BASIC_INFO: 1,
    AccessLevel.ADDRESS_CONTACT: 2,
    AccessLevel.KEY_OFFICIALS: 3,
    AccessLevel.FINANCIAL_INFO: 4,
    AccessLevel.FINANCIAL_METRICS: 4,
    AccessLevel.FUNDING_INVESTMENTS: 5,
    AccessLevel.REGULATORY_LEGAL: 6,
    AccessLevel.NEWS_RELATIONSHIPS: 7,
}

_DISPLAY_NAMES = {
    UserRole.FREEMIUM: "Freemium",
    UserRole.PREMIUM: "Premium",
    UserRole.ENTERPRISE: "Enterprise",
    UserRole.ADMIN: "Admin",
}

_DESCRIPTIONS = {
    UserRole.FREEMIUM: "Basic company information and contact details",
    UserRole.PREMIUM: "Basic info, contact, key officials, and financial data",
    UserRole.ENTERPRISE: "Full access to all company information",
    UserRole.ADMIN: "Full access with ability to create, update, and delete company data",
}

_EXPORT_LIMITATIONS = {
    UserRole.FREEMIUM: "Limited to Basic Info and Address & Contact data only",
    UserRole.PREMIUM: "Includes Basic Info, Address & Contact, Key Officials, Financial Info, and Financial Metrics",
    UserRole.ENTERPRISE: "Includes all company data sections",
    UserRole.ADMIN: "Full administrative access to all data",
}


def _visible(min_tiers: Dict[AccessLevel, UserRole], role: UserRole) -> FrozenSet[AccessLevel]:
    return frozenset(level for level, minimum in min_tiers.items() if role.rank >= minimum.rank)


ROLE_SECTIONS: Dict[UserRole, FrozenSet[AccessLevel]] = {
    role: _visible(SECTION_MIN_TIER, role) for role in _TIER_ORDER
}
ROLE_ACTIONS: Dict[UserRole, FrozenSet[AccessLevel]] = {
    role: _visible(ACTION_MIN_TIER, role) for role in _TIER_ORDER
}

RoleLike = Union[UserRole, str, None]
LevelLike = Union[AccessLevel, str, None]


def is_valid_role(role: RoleLike) -> bool:
    if isinstance(role, UserRole):
        return True
    return isinstance(role, str) and role in UserRole._value2member_map_


def normalize_role(role: RoleLike) -> UserRole:
    """Resolve any input to a role; anything unrecognised becomes FREEMIUM."""
    if isinstance(role, UserRole):
        return role
    if isinstance(role, str) and role.strip().upper() in UserRole._value2member_map_:
        return UserRole(role.strip().upper())
    return UserRole.FREEMIUM


def _level(level: LevelLike) -> Optional[AccessLevel]:
    if isinstance(level, AccessLevel):
        return level
    if isinstance(level, str) and level in AccessLevel._value2member_map_:
        return AccessLevel(level)
    return None


def has_section_access(role: RoleLike, section: LevelLike) -> bool:
    level = _level(section)
    if level is None:
        return False
    return level in ROLE_SECTIONS[normalize_role(role)]


def has_action_access(role: RoleLike, action: LevelLike) -> bool:
    level = _level(action)
    if level is None:
        return False
    return level in ROLE_ACTIONS[normalize_role(role)]


def can_modify_company_data(role: RoleLike) -> bool:
    return any(
        has_action_access(role, action)
        for action in (AccessLevel.CREATE_COMPANY, AccessLevel.UPDATE_COMPANY, AccessLevel.DELETE_COMPANY)
    )


def can_export_data(role: RoleLike) -> bool:
    return has_action_access(role, AccessLevel.EXPORT_DATA)


def can_compare_companies(role: RoleLike) -> bool:
    return has_action_access(role, AccessLevel.COMPARE_COMPANIES)


def can_view_market_analysis(role: RoleLike) -> bool:
    return has_action_access(role, AccessLevel.MARKET_ANALYSIS)


def can_use_watchlist(role: RoleLike, authenticated: bool = True) -> bool:
    """Every tier may use watchlists, but only with a signed-in user."""
    return authenticated and has_action_access(role, AccessLevel.USE_WATCHLIST)


def get_accessible_sections(role: RoleLike) -> List[AccessLevel]:
    allowed = ROLE_SECTIONS[normalize_role(role)]
    return [level for level in SECTION_MIN_TIER if level in allowed]


def get_accessible_section_names(role: RoleLike) -> List[str]:
    return [s["name"] for s in SECTIONS if has_section_access(role, s["access_level"])]


def get_available_actions(role: RoleLike) -> List[AccessLevel]:
    allowed = ROLE_ACTIONS[normalize_role(role)]
    return [level for level in ACTION_MIN_TIER if level in allowed]


def get_max_step_for_role(role: RoleLike) -> int:
    return max(_SECTION_STEP[level] for level in ROLE_SECTIONS[normalize_role(role)])


def get_role_display_name(role: RoleLike) -> str:
    if is_valid_role(role):
        return _DISPLAY_NAMES[normalize_role(role)]
    return role if isinstance(role, str) else ""


def get_role_description(role: RoleLike) -> str:
    if is_valid_role(role):
        return _DESCRIPTIONS[normalize_role(role)]
    return "Unknown role"


def get_export_limitations(role: RoleLike) -> str:
    return _EXPORT_LIMITATIONS[normalize_role(role)]


def required_tier_for_section(section: LevelLike) -> Optional[UserRole]:
    """Lowest tier that unlocks a section, for upgrade prompts."""
    level = _level(section)
    return SECTION_MIN_TIER.get(level) if level else None
