"""
versionroute — VersionConstraint Unit Tests
=============================================

What:  Tests for constraint construction, matching, combining and priority.

What we test:
    ✅ Declarations are parsed eagerly; bad ones fail registration
    ✅ Exact and range matching, inclusive bounds, default min 0.0.1
    ✅ Absent / empty / malformed headers never match and never raise
    ✅ combine() returns the handler-level constraint unchanged
    ✅ priority() rules 1-4 and the malformed-constraint fallback
"""

import pytest

from versionroute.exceptions import RouteRegistrationError
from versionroute.versioning.constraint import (
    DEFAULT_VERSION_HEADER,
    VersionConstraint,
    match,
    priority,
)
from versionroute.versioning.semantic_version import SemanticVersion


class TestDeclaration:
    """Tests for from_declaration / exactly / between."""

    def test_defaults(self):
        constraint = VersionConstraint.from_declaration()
        assert constraint.exact is None
        assert constraint.range_min == SemanticVersion(0, 0, 1)
        assert constraint.range_max is None
        assert constraint.header_name == DEFAULT_VERSION_HEADER == "api-version"

    def test_exact(self):
        constraint = VersionConstraint.exactly("3.0.0")
        assert constraint.is_exact
        assert constraint.exact == SemanticVersion(3, 0, 0)

    def test_range(self):
        constraint = VersionConstraint.between(min="1.0.0", max="2.0.0")
        assert not constraint.is_exact
        assert constraint.range_min == SemanticVersion(1, 0, 0)
        assert constraint.range_max == SemanticVersion(2, 0, 0)

    def test_header_normalised(self):
        constraint = VersionConstraint.between(header=" X-API-Version ")
        assert constraint.header_name == "x-api-version"

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"value": "3"}, "value"),
            ({"min": "one.two.three"}, "min"),
            ({"max": "2.0"}, "max"),
            ({"min": ""}, "min"),
        ],
    )
    def test_unparsable_declaration_rejected(self, kwargs, field):
        with pytest.raises(RouteRegistrationError) as exc_info:
            VersionConstraint.from_declaration(**kwargs)
        assert exc_info.value.field == field
        assert "not a valid version" in exc_info.value.message

    def test_inverted_range_rejected(self):
        with pytest.raises(RouteRegistrationError, match="can never match"):
            VersionConstraint.between(min="3.0.0", max="2.0.0")

    def test_single_point_range_allowed(self):
        constraint = VersionConstraint.between(min="2.0.0", max="2.0.0")
        assert constraint.matches("2.0.0")

    def test_empty_header_rejected(self):
        with pytest.raises(RouteRegistrationError) as exc_info:
            VersionConstraint.from_declaration(header="  ")
        assert exc_info.value.field == "header"

    def test_exactly_requires_value(self):
        with pytest.raises(RouteRegistrationError):
            VersionConstraint.exactly("")


class TestMatches:
    """Tests for matching a raw header value."""

    @pytest.mark.parametrize(
        "header, expected",
        [("3.0.0", True), (" 3.0.0 ", True), ("03.0.0", True), ("3.0.1", False), ("2.9.9", False)],
    )
    def test_exact(self, header, expected):
        assert VersionConstraint.exactly("3.0.0").matches(header) is expected

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("0.9.9", False),
            ("1.0.0", True),   # inclusive lower bound
            ("1.5.0", True),
            ("2.0.0", True),   # inclusive upper bound
            ("2.0.1", False),
        ],
    )
    def test_bounded_range(self, header, expected):
        constraint = VersionConstraint.between(min="1.0.0", max="2.0.0")
        assert constraint.matches(header) is expected

    def test_unbounded_range(self):
        constraint = VersionConstraint.between(min="4.0.0")
        assert constraint.matches("4.0.0")
        assert constraint.matches("999.999.999")
        assert not constraint.matches("3.99.99")

    def test_default_min_excludes_zero(self):
        constraint = VersionConstraint.between(max="20.0.0")
        assert not constraint.matches("0.0.0")
        assert constraint.matches("0.0.1")
        assert constraint.matches("0.5.0")

    @pytest.mark.parametrize("header", [None, "", "not-a-version", "1.2", "1.2.3.4", "-1.0.0"])
    def test_bad_header_never_matches(self, header):
        for constraint in (
            VersionConstraint.exactly("1.0.0"),
            VersionConstraint.between(),
            VersionConstraint.between(min="1.0.0", max="2.0.0"),
        ):
            assert constraint.matches(header) is False

    def test_exact_ignores_range_fields(self):
        constraint = VersionConstraint(
            exact=SemanticVersion(3, 0, 0),
            range_min=SemanticVersion(1, 0, 0),
            range_max=SemanticVersion(2, 0, 0),
        )
        assert constraint.matches("3.0.0")
        assert not constraint.matches("1.5.0")

    def test_free_function(self):
        assert match(VersionConstraint.exactly("1.0.0"), "1.0.0")
        assert not match(VersionConstraint.exactly("1.0.0"), None)


class TestCombine:
    """Tests for group-level + handler-level merging."""

    def test_handler_level_replaces_group_level(self):
        group = VersionConstraint.between(min="2.0.0", header="x-group")
        handler = VersionConstraint.exactly("1.0.0")
        combined = group.combine(handler)
        assert combined is handler
        assert combined.header_name == "api-version"
        assert combined.matches("1.0.0")
        assert not combined.matches("2.5.0")

    def test_no_field_blending(self):
        group = VersionConstraint.between(min="5.0.0", max="6.0.0")
        handler = VersionConstraint.between(max="10.0.0")
        assert group.combine(handler).range_min == SemanticVersion(0, 0, 1)


class TestPriority:
    """Tests for the dispatch ordering between two constraints."""

    def test_exact_outranks_range(self):
        exact = VersionConstraint.exactly("3.0.0")
        ranged = VersionConstraint.between(min="1.0.0", max="2.0.0")
        assert exact.priority(ranged) == -1
        assert ranged.priority(exact) == 1

    def test_exact_outranks_range_regardless_of_header(self):
        exact = VersionConstraint.exactly("1.0.0", header="x-one")
        ranged = VersionConstraint.between(min="50.0.0", header="x-two")
        assert exact.priority(ranged) == -1

    def test_larger_exact_first(self):
        v4 = VersionConstraint.exactly("4.0.0")
        v3 = VersionConstraint.exactly("3.0.0")
        assert v4.priority(v3) == -1
        assert v3.priority(v4) == 1
        assert v3.priority(VersionConstraint.exactly("3.0.0")) == 0

    def test_larger_min_first_regardless_of_bound(self):
        min_10 = VersionConstraint.between(min="10.0.0")
        range_1_2 = VersionConstraint.between(min="1.0.0", max="2.0.0")
        assert min_10.priority(range_1_2) == -1
        assert range_1_2.priority(min_10) == 1

    def test_equal_min_bounded_before_unbounded(self):
        bounded = VersionConstraint.between(min="1.0.0", max="2.0.0")
        unbounded = VersionConstraint.between(min="1.0.0")
        assert bounded.priority(unbounded) == -1
        assert unbounded.priority(bounded) == 1

    def test_equal_min_narrower_first(self):
        narrow = VersionConstraint.between(min="1.0.0", max="1.5.0")
        wide = VersionConstraint.between(min="1.0.0", max="2.0.0")
        assert narrow.priority(wide) == -1
        assert wide.priority(narrow) == 1

    def test_identical_ranges_tie(self):
        a = VersionConstraint.between(min="1.0.0")
        b = VersionConstraint.between(min="1.0.0")
        assert a.priority(b) == 0

    def test_malformed_constraint_treated_as_tie(self):
        hand_built = VersionConstraint(exact="3.0.0")
        assert hand_built.priority(VersionConstraint.exactly("4.0.0")) == 0
        assert VersionConstraint.exactly("4.0.0").priority(hand_built) == 0

    def test_free_function(self):
        assert priority(VersionConstraint.exactly("1.0.0"), VersionConstraint.between()) == -1


class TestTextForm:
    def test_exact(self):
        assert str(VersionConstraint.exactly("3.0.0")) == "VersionConstraint[value=3.0.0]"

    def test_range(self):
        assert str(VersionConstraint.between(min="1.0.0", max="2.0.0")) == "VersionConstraint[1.0.0-2.0.0]"

    def test_unbounded(self):
        assert str(VersionConstraint.between(min="4.0.0")) == "VersionConstraint[4.0.0-*]"
