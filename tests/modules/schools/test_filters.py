"""
Unit tests for school filtering, private fee pricing and ranking.
"""

from ksfp.modules.schools.filters import (
    SchoolFilter,
    apply_private_fee,
    filter_schools,
    format_currency,
    matches,
    rank_schools,
)
from ksfp.modules.schools.models import Grade, Ownership, Stream


def ids(schools):
    return [school.id for school in schools]


class TestFilterSchools:
    """Tests for filter_schools."""

    def test_max_fee_scenario(self, make_school):
        """Only the school under the fee ceiling is kept."""
        schools = [
            make_school(id="1", monthlyFee=1000, academicRating=8),
            make_school(id="2", monthlyFee=500, academicRating=4),
        ]

        result = filter_schools(schools, SchoolFilter(max_fee=700))

        assert ids(result) == ["2"]

    def test_no_criteria_keeps_everything(self, sample_schools):
        assert filter_schools(sample_schools) == sample_schools
        assert filter_schools(sample_schools, SchoolFilter()) == sample_schools

    def test_filter_by_grade(self, sample_schools):
        result = filter_schools(sample_schools, SchoolFilter(grade=Grade.SECONDARY))
        assert ids(result) == ["1", "4"]

    def test_filter_by_stream(self, sample_schools):
        result = filter_schools(sample_schools, SchoolFilter(stream=Stream.GIRLS))
        assert ids(result) == ["4"]

    def test_filter_by_ownership(self, sample_schools):
        result = filter_schools(sample_schools, SchoolFilter(ownership=Ownership.PRIVATE))
        assert ids(result) == ["2"]

    def test_fee_range_is_inclusive(self, sample_schools):
        result = filter_schools(sample_schools, SchoolFilter(min_fee=4200, max_fee=4500))
        assert ids(result) == ["1", "4"]

    def test_zero_fee_bound_is_no_constraint(self, sample_schools):
        result = filter_schools(sample_schools, SchoolFilter(min_fee=0, max_fee=0))
        assert ids(result) == ids(sample_schools)

    def test_combined_criteria(self, sample_schools):
        criteria = SchoolFilter(grade=Grade.SECONDARY, max_fee=4300)
        assert ids(filter_schools(sample_schools, criteria)) == ["4"]

    def test_result_is_subset_satisfying_all_criteria(self, sample_schools):
        criteria = SchoolFilter(ownership=Ownership.PUBLIC, min_fee=1000)

        result = filter_schools(sample_schools, criteria)

        assert all(school in sample_schools for school in result)
        assert all(matches(school, criteria) for school in result)
        assert ids(result) == ["1", "4"]

    def test_no_matches_returns_empty_list(self, sample_schools):
        assert filter_schools(sample_schools, SchoolFilter(max_fee=100)) == []


class TestApplyPrivateFee:
    """Tests for apply_private_fee."""

    def test_private_school_fee_doubled(self, make_school):
        school = make_school(type="private", monthlyFee=1000, yearlyFee=12000)

        priced = apply_private_fee(school)

        assert priced.monthly_fee == 2000
        assert priced.yearly_fee == 24000
        assert priced.fee_note == "Private school fee (doubled for non-scholarship)"
        assert school.monthly_fee == 1000

    def test_scholarship_applicant_pays_listed_fee(self, make_school):
        school = make_school(type="private", monthlyFee=1000)
        assert apply_private_fee(school, applying_for_scholarship=True) is school

    def test_public_school_unchanged(self, make_school):
        school = make_school(type="public", monthlyFee=1000)
        assert apply_private_fee(school) is school

    def test_custom_multiplier(self, make_school):
        school = make_school(type="private", monthlyFee=1000)

        priced = apply_private_fee(school, multiplier=1.5)

        assert priced.monthly_fee == 1500
        assert priced.fee_note == "Private school fee (x1.5 for non-scholarship)"


class TestRankSchools:
    """Tests for rank_schools."""

    def test_filters_sorts_and_scores(self, sample_schools):
        ranked = rank_schools(sample_schools, SchoolFilter(grade=Grade.PRIMARY))

        assert [r.school.id for r in ranked] == ["3", "2"]
        assert [r.score for r in ranked] == [48, 40]

    def test_sort_by_fee(self, sample_schools):
        ranked = rank_schools(sample_schools, None, "fee", "asc")
        assert [r.school.id for r in ranked] == ["3", "4", "1", "2"]


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_default_currency(self):
        assert format_currency(1500) == "KES 1,500.00"

    def test_custom_currency(self):
        assert format_currency(99.5, "USD") == "USD 99.50"
