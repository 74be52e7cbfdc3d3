"""
Unit tests for search predicate construction.
"""

from imessage_contacts.contacts.predicate import (
    HAS_NAME_FIELD,
    SearchPredicate,
    build_search_predicate,
)


class TestBuildSearchPredicate:
    """Tests for the three predicate shapes."""

    def test_empty_search_matches_any_named_record(self):
        """No first or last name yields the name-present filter with no params."""
        predicate = build_search_predicate("", None)

        assert predicate.expression == HAS_NAME_FIELD
        assert predicate.parameters == ()

    def test_empty_last_name_treated_as_absent(self):
        """An empty last name behaves like no last name."""
        assert build_search_predicate("", "") == build_search_predicate("", None)

    def test_first_and_last_name(self):
        """Last name present: two wildcarded params in first, last order."""
        predicate = build_search_predicate("Jo", "Do")

        assert predicate.parameters == ("%Jo%", "%Do%")
        assert "r.ZFIRSTNAME LIKE ? AND r.ZLASTNAME LIKE ?" in predicate.expression
        assert HAS_NAME_FIELD in predicate.expression
        assert predicate.expression.count("?") == 2

    def test_first_name_only_searches_all_name_fields(self):
        """First name only: four identical params across name fields."""
        predicate = build_search_predicate("ann")

        assert predicate.parameters == ("%ann%",) * 4
        for column in ("ZFIRSTNAME", "ZLASTNAME", "ZORGANIZATION", "ZNICKNAME"):
            assert f"r.{column} LIKE ?" in predicate.expression
        assert predicate.expression.count("?") == 4


class TestSearchPredicate:
    """Tests for the predicate value object."""

    def test_union_parameters_repeat_once_per_arm(self):
        """Parameters are duplicated for the phone and email arms."""
        predicate = SearchPredicate("x LIKE ? AND y LIKE ?", ("%a%", "%b%"))

        assert predicate.union_parameters() == ("%a%", "%b%", "%a%", "%b%")

    def test_placeholders_match_union_parameters(self):
        """Every predicate shape stays positionally consistent when doubled."""
        for args in (("", None), ("a", "b"), ("a", None)):
            predicate = build_search_predicate(*args)
            assert predicate.expression.count("?") * 2 == len(predicate.union_parameters())
