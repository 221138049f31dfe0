from geozones.config.settings import get_settings
from geozones.domain.models import DocumentRecord
from geozones.quality.report import build_run_report
from geozones.zoning.service import assign_zones


def _codes(report):
    return {i["code"] for i in report["issues"]}


def test_run_report_counts_and_issues():
    docs = [
        DocumentRecord(doc_id="1", property_address="100 MAIN ST", lat=29.4241, lng=-98.4936),
        DocumentRecord(doc_id="1", property_address="110 MAIN ST", lat=29.4300, lng=-98.4900),
        DocumentRecord(doc_id="3", property_address="", lat=None, lng=None),
        DocumentRecord(doc_id="4", property_address="4 OAK ST", lat=29.5, lng=None, extraction_error="timeout"),
    ]
    result = assign_zones(docs, settings=get_settings())
    report = build_run_report(docs, result)

    summary = report["summary"]
    assert summary["total_documents"] == 4
    assert summary["geocoded_documents"] == 2
    assert summary["ungeocoded_documents"] == 2
    assert summary["geocoding_rate"] == 0.5
    assert summary["successful_extractions"] == 3
    assert summary["total_zones"] == 1
    assert summary["largest_zone"] == {"zone_id": "Zone A", "count": 2}

    assert {
        "DOCS_DUPLICATE_ID",
        "DOCS_MISSING_COORDS",
        "DOCS_BAD_COORDS",
        "DOCS_EXTRACTION_ERRORS",
        "DOCS_MISSING_ADDRESS",
    } <= _codes(report)
    assert report["extraction_errors"] == [{"doc_id": "4", "error": "timeout"}]


def test_run_report_flags_all_singletons():
    docs = [
        DocumentRecord(doc_id=str(i), property_address=f"{i} FM 1560", lat=29.0 + i, lng=-98.0)
        for i in range(3)
    ]
    report = build_run_report(docs, assign_zones(docs, settings=get_settings()))
    assert "ZONES_ALL_SINGLETONS" in _codes(report)


def test_run_report_for_empty_batch():
    report = build_run_report([], assign_zones([], settings=get_settings()))
    assert report["summary"]["geocoding_rate"] == 0.0
    assert report["summary"]["largest_zone"] is None
    assert _codes(report) == {"DOCS_EMPTY"}
