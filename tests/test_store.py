from datetime import timedelta

import pytest

from custom_components.oba_regions.pyoba.models import RegionRecord
from custom_components.oba_regions.store import (
    KEY_AUTO_SELECT,
    KEY_CURRENT_REGION,
    KEY_LAST_UPDATED_AT,
    KEY_REGIONS,
)

from conftest import CUSTOM_MINNEAPOLIS, NOW, PUGET_SOUND


def test_empty_store_reads_as_absent(store):
    assert store.load_regions() is None
    assert store.load_current_region() is None
    assert store.load_last_updated_at() is None
    assert store.load_auto_select_enabled() is True


def test_round_trip(store):
    regions = [RegionRecord.from_dict(PUGET_SOUND), RegionRecord.from_dict(CUSTOM_MINNEAPOLIS)]
    store.save_regions(regions)
    store.save_current_region(regions[1])
    store.save_last_updated_at(NOW)
    store.save_auto_select_enabled(False)

    assert [r.as_dict() for r in store.load_regions()] == [r.as_dict() for r in regions]
    assert store.load_current_region().as_dict() == regions[1].as_dict()
    assert store.load_last_updated_at() == NOW
    assert store.load_auto_select_enabled() is False


def test_saving_none_clears_current_region(store, settings):
    store.save_current_region(RegionRecord.from_dict(PUGET_SOUND))
    store.save_current_region(None)
    assert KEY_CURRENT_REGION not in settings.data
    assert store.load_current_region() is None


def test_timestamp_is_stored_as_utc_iso_string(store, settings):
    store.save_last_updated_at(NOW - timedelta(days=1))
    assert settings.data[KEY_LAST_UPDATED_AT] == "2026-10-17T12:00:00+00:00"


@pytest.mark.parametrize(
    "payload",
    [
        "garbage",
        {"id": 1},
        [],
        [PUGET_SOUND, {"id": "x", "name": "broken"}],
        [PUGET_SOUND, PUGET_SOUND],
    ],
)
def test_corrupted_regions_read_as_absent(store, settings, payload, caplog):
    settings.set(KEY_REGIONS, payload)
    assert store.load_regions() is None
    assert "Ignoring corrupted stored regions" in caplog.text


def test_corrupted_scalars_read_as_absent(store, settings):
    settings.set(KEY_CURRENT_REGION, ["not", "a", "region"])
    settings.set(KEY_LAST_UPDATED_AT, "yesterday-ish")
    settings.set(KEY_AUTO_SELECT, "nope")

    assert store.load_current_region() is None
    assert store.load_last_updated_at() is None
    assert store.load_auto_select_enabled() is True


def test_one_corrupted_key_leaves_the_others_readable(store, settings):
    store.save_regions([RegionRecord.from_dict(PUGET_SOUND)])
    settings.set(KEY_CURRENT_REGION, 42)
    assert store.load_current_region() is None
    assert [r.id for r in store.load_regions()] == [1]
