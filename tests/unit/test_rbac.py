import unittest

from src.access.rbac import (
    AccessLevel,
    SECTION_MIN_TIER,
    SECTIONS,
    UserRole,
    can_compare_companies,
    can_export_data,
    can_modify_company_data,
    can_use_watchlist,
    can_view_market_analysis,
    get_accessible_section_names,
    get_accessible_sections,
    get_available_actions,
    get_max_step_for_role,
    get_role_description,
    get_role_display_name,
    has_action_access,
    has_section_access,
    is_valid_role,
    normalize_role,
    required_tier_for_section,
)

TIERS = [UserRole.FREEMIUM, UserRole.PREMIUM, UserRole.ENTERPRISE, UserRole.ADMIN]


class TestSectionAccess(unittest.TestCase):

    def test_financial_info_needs_premium(self):
        self.assertFalse(has_section_access(UserRole.FREEMIUM, AccessLevel.FINANCIAL_INFO))
        self.assertTrue(has_section_access(UserRole.PREMIUM, AccessLevel.FINANCIAL_INFO))
        self.assertTrue(has_section_access("PREMIUM", "financial_info"))

    def test_enterprise_sees_every_section(self):
        for section in SECTION_MIN_TIER:
            self.assertTrue(has_section_access(UserRole.ENTERPRISE, section), section)

    def test_freemium_sees_basic_and_contact_only(self):
        self.assertEqual(
            get_accessible_sections(UserRole.FREEMIUM),
            [AccessLevel.BASIC_INFO, AccessLevel.ADDRESS_CONTACT],
        )

    def test_premium_adds_officials_and_financials(self):
        self.assertEqual(
            set(get_accessible_sections(UserRole.PREMIUM)) - set(get_accessible_sections(UserRole.FREEMIUM)),
            {AccessLevel.KEY_OFFICIALS, AccessLevel.FINANCIAL_INFO, AccessLevel.FINANCIAL_METRICS},
        )

    def test_access_is_monotonic_across_tiers(self):
        for lower, higher in zip(TIERS, TIERS[1:]):
            for section in SECTION_MIN_TIER:
                if has_section_access(lower, section):
                    self.assertTrue(has_section_access(higher, section), (lower, higher, section))
            self.assertLessEqual(
                set(get_available_actions(lower)), set(get_available_actions(higher))
            )

    def test_unknown_role_behaves_as_freemium(self):
        for role in (None, "", "GUEST", 42):
            for section in SECTION_MIN_TIER:
                self.assertEqual(
                    has_section_access(role, section),
                    has_section_access(UserRole.FREEMIUM, section),
                )
            self.assertEqual(get_available_actions(role), get_available_actions(UserRole.FREEMIUM))

    def test_unknown_section_is_denied(self):
        self.assertFalse(has_section_access(UserRole.ADMIN, "secret_section"))
        self.assertFalse(has_section_access(UserRole.ADMIN, None))


class TestActions(unittest.TestCase):

    def test_only_admin_modifies_company_data(self):
        self.assertTrue(can_modify_company_data(UserRole.ADMIN))
        for role in (UserRole.FREEMIUM, UserRole.PREMIUM, UserRole.ENTERPRISE):
            self.assertFalse(can_modify_company_data(role))

    def test_export_requires_premium(self):
        self.assertFalse(can_export_data(UserRole.FREEMIUM))
        self.assertTrue(can_export_data(UserRole.PREMIUM))
        self.assertTrue(can_export_data(UserRole.ENTERPRISE))
        self.assertTrue(has_action_access(UserRole.ADMIN, AccessLevel.EXPORT_DATA))

    def test_comparison_and_market_analysis_require_enterprise(self):
        for role in (UserRole.FREEMIUM, UserRole.PREMIUM, "bogus", None):
            self.assertFalse(can_compare_companies(role))
            self.assertFalse(can_view_market_analysis(role))
        for role in (UserRole.ENTERPRISE, UserRole.ADMIN, "enterprise"):
            self.assertTrue(can_compare_companies(role))
            self.assertTrue(can_view_market_analysis(role))

    def test_watchlist_needs_signed_in_user(self):
        self.assertTrue(can_use_watchlist(UserRole.FREEMIUM))
        self.assertFalse(can_use_watchlist(UserRole.ENTERPRISE, authenticated=False))


class TestRoleHelpers(unittest.TestCase):

    def test_normalize_role(self):
        self.assertEqual(normalize_role("premium"), UserRole.PREMIUM)
        self.assertEqual(normalize_role(" ADMIN "), UserRole.ADMIN)
        self.assertEqual(normalize_role("bogus"), UserRole.FREEMIUM)
        self.assertEqual(normalize_role(None), UserRole.FREEMIUM)

    def test_is_valid_role(self):
        self.assertTrue(is_valid_role("ENTERPRISE"))
        self.assertTrue(is_valid_role(UserRole.ADMIN))
        self.assertFalse(is_valid_role("enterprise_plus"))
        self.assertFalse(is_valid_role(None))

    def test_display_names_and_descriptions(self):
        self.assertEqual(get_role_display_name(UserRole.PREMIUM), "Premium")
        self.assertEqual(get_role_display_name("MYSTERY"), "MYSTERY")
        self.assertEqual(get_role_description("MYSTERY"), "Unknown role")
        self.assertEqual(
            get_role_description(UserRole.ENTERPRISE), "Full access to all company information"
        )

    def test_max_step_grows_with_tier(self):
        steps = [get_max_step_for_role(role) for role in TIERS]
        self.assertEqual(steps, sorted(steps))
        self.assertEqual(get_max_step_for_role(UserRole.ENTERPRISE), 7)
        for step in steps:
            self.assertTrue(1 <= step <= 7)

    def test_section_names_follow_display_order(self):
        names = get_accessible_section_names(UserRole.PREMIUM)
        self.assertEqual(names, ["Basic Info", "Address & Contact", "Key Officials", "Financial Info", "Financial Metrics"])
        self.assertEqual(len(SECTIONS), 8)

    def test_required_tier_for_section(self):
        self.assertEqual(required_tier_for_section("funding_investments"), UserRole.ENTERPRISE)
        self.assertIsNone(required_tier_for_section("nope"))


if __name__ == "__main__":
    unittest.main()
