"""Tests for region pre-filtering of candidates."""

from types import SimpleNamespace

import pytest

from match_engine.errors import InvalidInputError
from match_engine.matching.region_filter import filter_by_region
from match_engine.matching.types import CandidateRecord, GeoPoint, Location, RegionFilter
from match_engine.models.enums import ExclusionReasonEnum

BERLIN = GeoPoint(latitude=52.52, longitude=13.405)
POTSDAM = GeoPoint(latitude=52.3906, longitude=13.0645)
MUNICH = GeoPoint(latitude=48.1351, longitude=11.582)


def candidate(cid: str, **location) -> CandidateRecord:
    return CandidateRecord(id=cid, location=Location(**location))


CANDIDATES = [
    candidate("berlin", city="Berlin", region="Berlin", country="Germany",
              coordinates=BERLIN, timezone="CET"),
    candidate("potsdam", city="Potsdam", region="Brandenburg", country="Germany",
              coordinates=POTSDAM, timezone="CET"),
    candidate("munich", city="Munich", region="Bavaria", country="Germany",
              coordinates=MUNICH, timezone="CET"),
    candidate("lisbon", city="Lisbon", country="Portugal", timezone="WET"),
]


class TestFilterByRegion:
    """Tests for filter_by_region."""

    def test_empty_filter_keeps_everyone(self):
        """A filter without criteria excludes nobody."""
        result = filter_by_region(CANDIDATES, RegionFilter())
        assert [c.id for c in result.filtered] == ["berlin", "potsdam", "munich", "lisbon"]
        assert result.excluded == ()
        assert result.stats.total_candidates == 4
        assert result.stats.excluded_count == 0

    def test_country_filter_is_case_insensitive(self):
        """Country allow-list ignores case."""
        result = filter_by_region(CANDIDATES, RegionFilter(countries=("germany",)))
        assert [c.id for c in result.filtered] == ["berlin", "potsdam", "munich"]
        assert result.excluded[0].candidate.id == "lisbon"
        assert result.excluded[0].reasons == (ExclusionReasonEnum.COUNTRY,)

    def test_first_failing_filter_is_reported(self):
        """Country is checked before city, so a foreign candidate counts as a country exclusion."""
        result = filter_by_region(
            CANDIDATES, RegionFilter(countries=("Germany",), cities=("Berlin",))
        )
        assert [c.id for c in result.filtered] == ["berlin"]
        assert result.stats.filter_reasons == {"country": 1, "city": 2}

    def test_region_filter(self):
        """Region allow-list keeps candidates of those regions."""
        result = filter_by_region(CANDIDATES, RegionFilter(regions=("Brandenburg", "Bavaria")))
        assert [c.id for c in result.filtered] == ["potsdam", "munich"]

    def test_distance_filter(self):
        """Candidates beyond the radius are excluded; those without coordinates too."""
        result = filter_by_region(
            CANDIDATES, RegionFilter(max_distance_km=50, center_point=BERLIN)
        )
        assert [c.id for c in result.filtered] == ["berlin", "potsdam"]
        reasons = {e.candidate.id: e.reasons for e in result.excluded}
        assert reasons == {
            "munich": (ExclusionReasonEnum.DISTANCE,),
            "lisbon": (ExclusionReasonEnum.NO_COORDINATES,),
        }

    def test_distance_needs_center_point(self):
        """A radius without a center point is ignored."""
        result = filter_by_region(CANDIDATES, RegionFilter(max_distance_km=50))
        assert result.stats.filtered_count == 4

    def test_timezone_filter(self):
        """Timezone allow-list is applied last."""
        result = filter_by_region(CANDIDATES, RegionFilter(timezones=("wet",)))
        assert [c.id for c in result.filtered] == ["lisbon"]
        assert result.stats.filter_reasons == {"timezone": 3}

    def test_missing_location_field_fails_allow_list(self):
        """A candidate without the filtered field is excluded."""
        result = filter_by_region([candidate("nowhere")], RegionFilter(cities=("Berlin",)))
        assert result.filtered == ()
        assert result.excluded[0].reasons == (ExclusionReasonEnum.CITY,)

    def test_stats_add_up(self):
        """filtered + excluded always equals the input size."""
        result = filter_by_region(
            CANDIDATES, RegionFilter(countries=("Germany",), max_distance_km=100, center_point=BERLIN)
        )
        stats = result.stats
        assert stats.filtered_count + stats.excluded_count == stats.total_candidates == 4
        assert sum(stats.filter_reasons.values()) == stats.excluded_count

    def test_empty_input(self):
        """No candidates produce empty results."""
        result = filter_by_region([], RegionFilter(countries=("Germany",)))
        assert result.filtered == ()
        assert result.stats.total_candidates == 0

    def test_dict_candidates_are_rejected(self):
        """A mapping-shaped candidate is an error rather than an empty location."""
        with pytest.raises(InvalidInputError):
            filter_by_region(
                [{"id": "x", "location": {"country": "Germany"}}],
                RegionFilter(countries=("Germany",)),
            )

    def test_non_location_value_is_rejected(self):
        """A location attribute that is not a Location is an error."""
        row = SimpleNamespace(id="x", location={"country": "Germany"})
        with pytest.raises(InvalidInputError):
            filter_by_region([row], RegionFilter())

    def test_none_location_counts_as_empty(self):
        """A candidate with location None is filtered like one with no fields set."""
        row = SimpleNamespace(id="x", location=None)
        assert filter_by_region([row], RegionFilter()).filtered == (row,)
        result = filter_by_region([row], RegionFilter(countries=("Germany",)))
        assert result.filtered == ()
        assert len(result.excluded) == 1
