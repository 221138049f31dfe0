import pytest

from geozones.zoning.clustering import assign_zone_labels
from geozones.zoning.summary import build_map_link, summarize_zones


def _latlng(record):
    return record.get("lat"), record.get("lng")


def _address(record):
    return record.get("address")


def _summarize(records, labels, **kwargs):
    return summarize_zones(records, labels, get_latlng=_latlng, get_address=_address, **kwargs)


def test_centroid_is_arithmetic_mean():
    records = [{"lat": 1.0, "lng": 1.0, "address": "x"}, {"lat": 1.0, "lng": 3.0, "address": "y"}]
    zones = _summarize(records, ["Zone A", "Zone A"])
    assert len(zones) == 1
    assert zones[0].centroid_lat == pytest.approx(1.0)
    assert zones[0].centroid_lng == pytest.approx(2.0)
    assert zones[0].count == 2


def test_centroid_after_clustering():
    records = [{"lat": 1.0, "lng": 1.0}, {"lat": 1.0, "lng": 3.0}]
    assignment = assign_zone_labels(records, get_latlng=_latlng, radius_miles=200)
    zones = _summarize(records, assignment.labels, zone_order=assignment.zone_order)
    assert [(z.zone_id, z.centroid_lat, z.centroid_lng) for z in zones] == [("Zone A", 1.0, 2.0)]


def test_sample_addresses_take_first_three_records_and_drop_blanks():
    records = [
        {"lat": 29.0, "lng": -98.0, "address": "100 MAIN ST"},
        {"lat": 29.0, "lng": -98.0, "address": "   "},
        {"lat": 29.0, "lng": -98.0, "address": None},
        {"lat": 29.0, "lng": -98.0, "address": "400 ELM ST"},
    ]
    zones = _summarize(records, ["Zone A"] * 4)
    assert zones[0].sample_addresses == ["100 MAIN ST"]
    assert zones[0].count == 4


def test_sample_limit_is_configurable():
    records = [{"lat": 29.0, "lng": -98.0, "address": f"{i} OAK ST"} for i in range(5)]
    zones = _summarize(records, ["Zone A"] * 5, sample_limit=2)
    assert zones[0].sample_addresses == ["0 OAK ST", "1 OAK ST"]


def test_zones_sorted_by_count_then_label_order():
    records = [{"lat": 29.0 + i, "lng": -98.0} for i in range(6)]
    labels = ["Zone C", "Zone B", "Zone B", "Zone A", "Zone D", "Zone D"]
    zones = _summarize(records, labels, zone_order=["Zone A", "Zone B", "Zone C", "Zone D"])
    assert [(z.zone_id, z.count) for z in zones] == [("Zone B", 2), ("Zone D", 2), ("Zone A", 1), ("Zone C", 1)]


def test_without_zone_order_first_appearance_breaks_ties():
    records = [{"lat": 29.0, "lng": -98.0}] * 2
    zones = _summarize(records, ["Zone B", "Zone A"])
    assert [z.zone_id for z in zones] == ["Zone B", "Zone A"]


def test_unlabeled_records_are_not_counted():
    records = [{"lat": None, "lng": None}, {"lat": 29.0, "lng": -98.0}]
    zones = _summarize(records, [None, "Zone A"])
    assert [(z.zone_id, z.count) for z in zones] == [("Zone A", 1)]


def test_group_without_usable_coordinates_is_skipped():
    records = [{"lat": None, "lng": None}, {"lat": 29.0, "lng": -98.0}]
    zones = _summarize(records, ["Zone B", "Zone A"])
    assert [z.zone_id for z in zones] == ["Zone A"]


def test_empty_input_yields_no_zones():
    assert _summarize([], []) == []


def test_labels_must_align_with_records():
    with pytest.raises(ValueError, match="align"):
        _summarize([{"lat": 1.0, "lng": 1.0}], [])


def test_map_link_points_at_centroid():
    zones = _summarize([{"lat": 29.5, "lng": -98.25}], ["Zone A"])
    assert zones[0].map_link == "https://www.google.com/maps/search/?api=1&query=29.5,-98.25"
    assert build_map_link(1.0, 2.0, "geo:{lat},{lng}") == "geo:1.0,2.0"
