import pytest

from src.safai.models.domain import Coordinate, ReportLocation
from src.safai.services.geospatial import distance_km
from src.safai.services.routing.optimizer import InsufficientSelection, SelectionTooLarge, optimize_route
from src.safai.services.routing.regions import CITY_COORDINATES


def _location(rid: str, city: str, coordinate: Coordinate | None = None) -> ReportLocation:
    return ReportLocation(id=rid, coordinate=coordinate, fallback_region=city, label=city, category="Domestic")


def _ids(route):
    return [location.id for location in route]


def test_mumbai_pune_delhi_visits_pune_second():
    selection = [_location("M", "Mumbai"), _location("D", "Delhi"), _location("P", "Pune")]
    route = optimize_route(selection)
    assert _ids(route) == ["M", "P", "D"]


def test_output_is_a_permutation_of_the_selection():
    cities = ["Jaipur", "Agra", "Delhi", "Lucknow", "Kanpur", "Patna", "Bhopal", "Indore"]
    selection = [_location(f"R{i}", city) for i, city in enumerate(cities)]
    route = optimize_route(selection)
    assert sorted(_ids(route)) == sorted(_ids(selection))
    assert len(set(_ids(route))) == len(selection)
    assert route[0].id == "R0"


def test_each_step_picks_the_nearest_remaining_stop():
    cities = ["Chennai", "Surat", "Nagpur", "Kolkata", "Thane", "Rajkot"]
    selection = [_location(f"R{i}", city) for i, city in enumerate(cities)]
    route = optimize_route(selection)
    for index in range(len(route) - 1):
        here = CITY_COORDINATES[route[index].fallback_region]
        chosen = distance_km(here, CITY_COORDINATES[route[index + 1].fallback_region])
        for other in route[index + 2:]:
            assert chosen <= distance_km(here, CITY_COORDINATES[other.fallback_region])


def test_is_deterministic():
    selection = [_location(f"R{i}", city) for i, city in enumerate(["Pune", "Nashik", "Thane", "Mumbai", "Surat"])]
    assert _ids(optimize_route(selection)) == _ids(optimize_route(list(selection)))


def test_ties_go_to_the_first_selected_candidate():
    start = _location("S", "X", Coordinate(0.0, 0.0))
    east = _location("E", "X", Coordinate(0.0, 1.0))
    west = _location("W", "X", Coordinate(0.0, -1.0))
    assert _ids(optimize_route([start, east, west])) == ["S", "E", "W"]
    assert _ids(optimize_route([start, west, east])) == ["S", "W", "E"]


def test_unresolved_location_is_still_routed():
    selection = [_location("M", "Mumbai"), _location("U", "Nowhere"), _location("P", "Pune")]
    route = optimize_route(selection)
    assert _ids(route).count("U") == 1
    assert _ids(route) == ["M", "P", "U"]


def test_two_reports_give_a_single_leg_route():
    route = optimize_route([_location("A", "Agra"), _location("B", "Bhopal")])
    assert _ids(route) == ["A", "B"]


@pytest.mark.parametrize("size", [0, 1])
def test_small_selections_are_rejected(size):
    selection = [_location(f"R{i}", "Pune") for i in range(size)]
    with pytest.raises(InsufficientSelection):
        optimize_route(selection)


def test_duplicate_ids_count_once():
    with pytest.raises(InsufficientSelection):
        optimize_route([_location("A", "Pune"), _location("A", "Pune")])
    route = optimize_route([_location("A", "Pune"), _location("B", "Agra"), _location("A", "Pune")])
    assert _ids(route) == ["A", "B"]


def test_selection_above_limit_is_rejected():
    selection = [_location(f"R{i}", "Pune") for i in range(4)]
    with pytest.raises(SelectionTooLarge):
        optimize_route(selection, max_stops=3)


def test_custom_resolver_is_used():
    points = {"A": Coordinate(0, 0), "B": Coordinate(0, 10), "C": Coordinate(0, 1)}
    selection = [_location(rid, "Nowhere") for rid in "ABC"]
    route = optimize_route(selection, resolver=lambda location: points[location.id])
    assert _ids(route) == ["A", "C", "B"]


def test_unresolved_stop_is_logged(caplog):
    selection = [_location("M", "Mumbai"), _location("U", "Nowhere")]
    with caplog.at_level("WARNING", logger="src.safai.services.routing.optimizer"):
        optimize_route(selection)
    assert any("Report U" in record.getMessage() for record in caplog.records)
    assert not any("Report M" in record.getMessage() for record in caplog.records)


def test_custom_resolver_placing_a_stop_is_not_logged_as_unresolved(caplog):
    points = {"A": Coordinate(10, 10), "B": Coordinate(11, 11)}
    selection = [_location(rid, "Nowhere") for rid in "AB"]
    with caplog.at_level("WARNING", logger="src.safai.services.routing.optimizer"):
        optimize_route(selection, resolver=lambda location: points[location.id])
    assert caplog.records == []
