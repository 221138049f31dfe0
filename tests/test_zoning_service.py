from geozones.config.settings import get_settings
from geozones.domain.models import DocumentRecord
from geozones.zoning.service import assign_zones


def _docs():
    return [
        DocumentRecord(doc_id="1", property_address="100 MAIN ST, SAN ANTONIO, TX 78205", lat=29.4241, lng=-98.4936),
        DocumentRecord(doc_id="2", property_address="110 MAIN ST, SAN ANTONIO, TX 78205", lat=29.4300, lng=-98.4900),
        DocumentRecord(doc_id="3", property_address="UNKNOWN", lat=None, lng=None, zone_id="Zone Q"),
        DocumentRecord(doc_id="4", property_address="9 FAR RD, HELOTES, TX 78023", lat=29.5780, lng=-98.6897),
    ]


def test_assign_zones_annotates_copies_and_summarizes():
    docs = _docs()
    result = assign_zones(docs, settings=get_settings())

    assert [d.zone_id for d in result.documents] == ["Zone A", "Zone A", None, "Zone B"]
    # Inputs are left untouched.
    assert docs[0].zone_id is None
    assert docs[2].zone_id == "Zone Q"

    assert [(z.zone_id, z.count) for z in result.zones] == [("Zone A", 2), ("Zone B", 1)]
    assert result.zones[0].sample_addresses == [
        "100 MAIN ST, SAN ANTONIO, TX 78205",
        "110 MAIN ST, SAN ANTONIO, TX 78205",
    ]
    assert result.meta["points"] == 3
    assert result.meta["clusters"] == 1
    assert result.meta["singletons"] == 1
    assert result.meta["radius_miles"] == get_settings().clustering.radius_miles


def test_zone_counts_cover_exactly_the_geocoded_documents():
    result = assign_zones(_docs(), settings=get_settings())
    assert sum(z.count for z in result.zones) == sum(1 for d in result.documents if d.zone_id)


def test_radius_argument_overrides_settings():
    result = assign_zones(_docs(), settings=get_settings(), radius_miles=50)
    assert [d.zone_id for d in result.documents] == ["Zone A", "Zone A", None, "Zone A"]
    assert result.meta["radius_miles"] == 50


def test_settings_select_index_and_label_scheme():
    settings = get_settings()
    clustering = settings.clustering.model_copy(update={"neighbor_index": "grid", "label_scheme": "numeric"})
    settings = settings.model_copy(update={"clustering": clustering})

    result = assign_zones(_docs(), settings=settings)
    assert [d.zone_id for d in result.documents] == ["Zone-1", "Zone-1", None, "Zone-2"]
    assert result.meta["neighbor_index"] == "grid"


def test_empty_batch():
    result = assign_zones([], settings=get_settings())
    assert result.documents == []
    assert result.zones == []
