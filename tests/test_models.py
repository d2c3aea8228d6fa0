import pytest

from custom_components.oba_regions.pyoba.exceptions import MalformedRegion
from custom_components.oba_regions.pyoba.models import RegionRecord, parse_region_list

from conftest import PUGET_SOUND


def test_decodes_compact_wire_shape():
    region = RegionRecord.from_dict(PUGET_SOUND)
    assert region.id == 1
    assert region.name == "Puget Sound"
    assert region.api_base_url == "https://api.pugetsound.onebusaway.org/"
    assert region.is_active and region.supports_realtime and not region.is_experimental
    assert region.language == "en_US"
    assert region.coverage == (((46.9, -123.0), (46.9, -121.7), (48.3, -121.7), (48.3, -123.0)),)


def test_decodes_directory_field_names_and_bounds():
    region = RegionRecord.from_dict(
        {
            "id": 0,
            "regionName": "Tampa Bay",
            "obaBaseUrl": "https://api.tampa.onebusaway.org/api/",
            "active": True,
            "experimental": False,
            "supportsObaRealtimeApis": True,
            "language": "en_US",
            "bounds": [{"lat": 28.0, "lon": -82.5, "latSpan": 1.0, "lonSpan": 2.0}],
            "contactEmail": "ignored@example.com",
        }
    )
    assert region.id == 0
    assert region.name == "Tampa Bay"
    assert region.supports_realtime
    assert region.coverage == (((27.5, -83.5), (27.5, -81.5), (28.5, -81.5), (28.5, -83.5)),)


def test_flat_vertex_list_and_object_vertices_are_one_polygon():
    region = RegionRecord.from_dict(
        {
            "id": 5,
            "name": "Triangle",
            "url": "https://t.example.com/",
            "region": [{"lat": 0, "lon": 0}, {"lat": 0, "lon": 1}, {"lat": 1, "lon": 0}],
        }
    )
    assert region.coverage == (((0.0, 0.0), (0.0, 1.0), (1.0, 0.0)),)


def test_blank_strings_are_absent():
    region = RegionRecord.from_dict(
        {"id": "7", "name": "  York ", "url": "   ", "active": False, "lang": ""}
    )
    assert region.id == 7
    assert region.name == "York"
    assert region.api_base_url is None
    assert region.language is None


@pytest.mark.parametrize(
    "payload",
    [
        "not a mapping",
        {"name": "No id", "url": "https://x.example.com/"},
        {"id": "abc", "name": "Bad id", "url": "https://x.example.com/"},
        {"id": 1, "name": "   ", "url": "https://x.example.com/"},
        {"id": 1, "name": "Active without url", "active": True},
        {"id": 1, "name": "Relative url", "url": "/api/"},
        {"id": 1, "name": "Two vertices", "url": "https://x.example.com/", "region": [[[0, 0], [1, 1]]]},
        {"id": 1, "name": "Off the globe", "url": "https://x.example.com/", "region": [[[0, 0], [0, 1], [95, 0]]]},
        {"id": 1, "name": "Bowtie", "url": "https://x.example.com/", "region": [[[0, 0], [2, 2], [0, 2], [2, 0]]]},
        {"id": 1, "name": "Half bounds", "url": "https://x.example.com/", "bounds": [{"lat": 1, "lon": 2}]},
    ],
)
def test_malformed_records(payload):
    with pytest.raises(MalformedRegion):
        RegionRecord.from_dict(payload)


def test_equality_and_hash_by_id():
    a = RegionRecord(id=1, name="A", api_base_url="https://a.example.com/")
    b = RegionRecord(id=1, name="B", api_base_url="https://b.example.com/")
    assert a == b
    assert len({a, b}) == 1
    assert a != RegionRecord(id=2, name="A", api_base_url="https://a.example.com/")


def test_as_dict_decodes_to_identical_record():
    region = RegionRecord.from_dict(PUGET_SOUND)
    assert RegionRecord.from_dict(region.as_dict()).as_dict() == region.as_dict()


def test_parse_region_list_drops_bad_and_duplicate_records(caplog):
    regions = parse_region_list(
        [
            PUGET_SOUND,
            {"id": 2, "name": "Broken"},
            {**PUGET_SOUND, "name": "Puget Sound again"},
            {"id": 3, "name": "Inactive", "active": False},
        ]
    )
    assert [r.id for r in regions] == [1, 3]
    assert regions[0].name == "Puget Sound"
    assert "Dropping malformed region" in caplog.text
    assert "Dropping duplicate region id 1" in caplog.text
