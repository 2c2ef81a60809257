"""Tests for location matching and timezone compatibility."""

import pytest

from match_engine.matching.geometry import haversine_km
from match_engine.matching.location import match_by_location, timezones_compatible
from match_engine.matching.types import GeoPoint, Location

BERLIN = GeoPoint(latitude=52.52, longitude=13.405)
NEAR_BERLIN = GeoPoint(latitude=52.62, longitude=13.405)
FAR_FROM_BERLIN = GeoPoint(latitude=53.52, longitude=13.405)


class TestMatchByLocation:
    """Tests for match_by_location."""

    def test_remote_candidate_scores_full(self):
        """A remote candidate matches any job."""
        result = match_by_location(Location(remote=True), Location(city="Berlin"))
        assert result.score == 1.0
        assert result.match is True
        assert result.distance_km is None

    def test_remote_job_scores_full(self):
        """A remote job matches any candidate."""
        result = match_by_location(Location(city="Lisbon"), Location(remote=True))
        assert result.score == 1.0
        assert result.match is True

    def test_same_coordinates(self):
        """Zero distance scores 1.0."""
        result = match_by_location(Location(coordinates=BERLIN), Location(coordinates=BERLIN))
        assert result.score == 1.0
        assert result.distance_km == 0.0

    def test_distance_decays_linearly_within_default_radius(self):
        """Inside the 50 km default radius the score drops linearly towards 0.5."""
        result = match_by_location(
            Location(coordinates=NEAR_BERLIN), Location(coordinates=BERLIN)
        )
        distance = haversine_km(NEAR_BERLIN, BERLIN)
        assert result.match is True
        assert result.distance_km == pytest.approx(distance)
        assert result.score == pytest.approx(1 - (distance / 50) * 0.5)

    def test_job_radius_overrides_default(self):
        """The job's own max distance widens the radius."""
        result = match_by_location(
            Location(coordinates=FAR_FROM_BERLIN),
            Location(coordinates=BERLIN, max_distance_km=200),
        )
        distance = haversine_km(FAR_FROM_BERLIN, BERLIN)
        assert result.score == pytest.approx(1 - (distance / 200) * 0.5)

    def test_out_of_radius_falls_back_to_city(self):
        """Beyond the radius, a shared city still matches and the distance is reported."""
        result = match_by_location(
            Location(city="Berlin", coordinates=FAR_FROM_BERLIN),
            Location(city="Berlin", coordinates=BERLIN),
        )
        assert result.score == 1.0
        assert result.match is True
        assert result.distance_km == pytest.approx(111.19, abs=0.1)

    def test_city_comparison_is_case_insensitive(self):
        """City names match regardless of case."""
        result = match_by_location(Location(city="berlin"), Location(city="BERLIN"))
        assert result.score == 1.0

    def test_same_region(self):
        """A shared region scores 0.8."""
        result = match_by_location(
            Location(city="Potsdam", region="Brandenburg"),
            Location(city="Cottbus", region="Brandenburg"),
        )
        assert result.score == 0.8
        assert result.match is True

    def test_same_country(self):
        """A shared country scores 0.6."""
        result = match_by_location(
            Location(city="Hamburg", country="Germany"),
            Location(city="Munich", country="Germany"),
        )
        assert result.score == 0.6

    def test_no_overlap(self):
        """Nothing in common scores 0 and does not match."""
        result = match_by_location(
            Location(city="Lisbon", country="Portugal"),
            Location(city="Berlin", country="Germany"),
        )
        assert result.score == 0.0
        assert result.match is False

    def test_empty_locations_do_not_match(self):
        """Two empty locations share nothing."""
        result = match_by_location(Location(), Location())
        assert result.score == 0.0
        assert result.match is False

    def test_timezone_reported_on_every_path(self):
        """Timezone compatibility is filled in even for remote matches."""
        remote = match_by_location(
            Location(remote=True, timezone="CET"), Location(timezone="JST")
        )
        city = match_by_location(
            Location(city="Berlin", timezone="CET"), Location(city="Berlin", timezone="CEST")
        )
        assert remote.timezone_compatible is False
        assert city.timezone_compatible is True


class TestTimezonesCompatible:
    """Tests for timezones_compatible."""

    def test_same_zone(self):
        """Equal identifiers are compatible."""
        assert timezones_compatible("Europe/Lisbon", "Europe/Lisbon") is True

    def test_same_group(self):
        """Zones of the same group are compatible."""
        assert timezones_compatible("EST", "America/New_York") is True
        assert timezones_compatible("GMT", "UTC") is True

    def test_different_groups(self):
        """Zones of different groups are not compatible."""
        assert timezones_compatible("CET", "PST") is False

    def test_unknown_zones_differ(self):
        """Unknown, unequal zones are not compatible."""
        assert timezones_compatible("Europe/Lisbon", "Europe/Madrid") is False

    def test_missing_zone_is_compatible(self):
        """A missing zone on either side never blocks."""
        assert timezones_compatible(None, "CET") is True
        assert timezones_compatible("CET", "") is True
