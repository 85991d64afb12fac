"""Tests for the JSON-backed counter store."""

import json

from namescout.services.quota_store import (
    CooldownEntry,
    GlobalQuotaRecord,
    QuotaStore,
    RateLimitState,
    next_utc_midnight,
    utc_today,
)


def test_missing_document_loads_fresh_state_for_today(store, clock):
    state = store.load()

    assert state.global_quota.count == 0
    assert state.global_quota.reset_date == utc_today(clock) == "2026-03-01"
    assert state.cooldowns == {}


def test_save_creates_directory_and_writes_camel_case_document(store, state_file):
    state = RateLimitState(
        global_quota=GlobalQuotaRecord(count=7, reset_date="2026-03-01"),
        cooldowns={"1.2.3.4": CooldownEntry(until=1_772_366_460_000)},
    )

    store.save(state)

    document = json.loads(state_file.read_text())
    assert document == {
        "global": {"count": 7, "resetDate": "2026-03-01"},
        "cooldowns": {"1.2.3.4": {"until": 1_772_366_460_000}},
    }


def test_round_trip_survives_new_store_instance(store, state_file, clock):
    state = store.load()
    state.global_quota.count = 3
    store.save(state)

    reopened = QuotaStore(state_file, clock=clock).load()

    assert reopened.global_quota.count == 3


def test_corrupt_document_degrades_to_default(store, state_file, caplog):
    state_file.parent.mkdir(parents=True)
    state_file.write_text("{not json")

    with caplog.at_level("WARNING", logger="namescout.store"):
        state = store.load()

    assert state.global_quota.count == 0
    assert "unreadable" in caplog.text


def test_wrong_shape_document_degrades_to_default(store, state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps({"global": {"count": -4, "resetDate": "x"}}))

    assert store.load().global_quota.count == 0


def test_save_failure_is_logged_not_raised(tmp_path, clock, caplog):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    store = QuotaStore(blocker / "state.json", clock=clock)

    with caplog.at_level("ERROR", logger="namescout.store"):
        store.save(store.default_state())

    assert "Failed to save" in caplog.text


def test_failed_save_is_served_from_memory(tmp_path, clock):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    store = QuotaStore(blocker / "state.json", clock=clock)

    state = store.load()
    state.global_quota.count = 7
    store.save(state)
    state.global_quota.count = 99

    assert store.load().global_quota.count == 7


def test_successful_save_drops_memory_copy(tmp_path, clock):
    store = QuotaStore(tmp_path / "state.json", clock=clock)
    store._unsaved = store.default_state()
    store._unsaved.global_quota.count = 7

    state = store.load()
    state.global_quota.count = 8
    store.save(state)
    store.path.unlink()

    assert store.load().global_quota.count == 0


def test_next_utc_midnight(clock):
    midnight = next_utc_midnight(clock)

    assert midnight.isoformat() == "2026-03-02T00:00:00+00:00"
