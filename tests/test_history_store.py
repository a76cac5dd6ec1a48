"""
Tests para HistoryStore: orden, filtros, persistencia y carga tolerante.
"""

import json

import pytest

from adapters.kv_stores import InMemoryKeyValueStore
from core.domain.errors import HistoryPersistError
from core.domain.models import HistoryEntry, HistoryFilter
from core.services.history_store import DEFAULT_HISTORY_KEY, HistoryStore


def _record_many(store, pairs):
    for question, answer in pairs:
        store.record(question, answer)


class TestRecord:
    def test_newest_first(self, history):
        _record_many(history, [("a?", "yes"), ("b?", "no"), ("c?", "maybe")])

        assert len(history) == 3
        assert [e.question for e in history.entries] == ["c?", "b?", "a?"]

    def test_entries_are_immutable(self, history):
        entry = history.record("a?", "yes")
        with pytest.raises(Exception):
            entry.answer = "no"

    def test_every_record_rewrites_full_snapshot(self, kv_store, history):
        history.record("a?", "yes")
        history.record("b?", "no")

        stored = json.loads(kv_store.get(DEFAULT_HISTORY_KEY))
        assert stored == [
            {"question": "b?", "answer": "no"},
            {"question": "a?", "answer": "yes"},
        ]

    def test_failed_write_leaves_entries_untouched(self, kv_store, history):
        history.record("a?", "yes")
        before = kv_store.get(DEFAULT_HISTORY_KEY)

        def broken_set(key, value):
            raise PermissionError("read-only disk")

        kv_store.set = broken_set
        with pytest.raises(HistoryPersistError):
            history.record("b?", "no")

        assert [e.question for e in history.entries] == ["a?"]
        assert kv_store.get(DEFAULT_HISTORY_KEY) == before

    def test_surrogates_are_stored_as_ascii(self, kv_store, history):
        history.record("\udcff?", "yes")

        raw = kv_store.get(DEFAULT_HISTORY_KEY)
        assert raw.isascii()
        assert json.loads(raw) == [{"question": "\udcff?", "answer": "yes"}]


class TestFiltered:
    def test_filter_is_case_insensitive_and_keeps_order(self, history):
        _record_many(
            history,
            [("a?", "Yes"), ("b?", "no"), ("c?", "yes"), ("d?", "Error"), ("e?", "YES")],
        )

        result = list(history.filtered(HistoryFilter.YES))

        assert [e.question for e in result] == ["e?", "c?", "a?"]

    def test_all_returns_everything(self, history):
        _record_many(history, [("a?", "yes"), ("b?", "Error")])
        assert list(history.filtered(HistoryFilter.ALL)) == list(history.entries)

    def test_accepts_plain_strings(self, history):
        _record_many(history, [("a?", "maybe"), ("b?", "no")])
        assert [e.question for e in history.filtered("maybe")] == ["a?"]

    def test_view_is_lazy_and_restartable(self, history):
        view = history.filtered(HistoryFilter.NO)
        assert list(view) == []

        history.record("a?", "No")
        assert len(view) == 1
        assert list(view) == list(view)

    def test_error_entries_only_show_under_all(self, history):
        history.record("a?", "Error")
        for f in (HistoryFilter.YES, HistoryFilter.NO, HistoryFilter.MAYBE):
            assert not history.filtered(f)
        assert len(history.filtered(HistoryFilter.ALL)) == 1


class TestLoad:
    def test_round_trip(self, kv_store):
        first = HistoryStore(kv_store)
        first.load()
        _record_many(first, [("¿Lloverá?", "Yes"), ("b?", "no")])

        second = HistoryStore(kv_store)
        second.load()

        assert second.entries == first.entries

    def test_missing_slot_is_empty(self):
        store = HistoryStore(InMemoryKeyValueStore())
        assert store.load() == ()

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "{}",
            "42",
            '[{"question": "a?"}]',
            '[{"question": 1, "answer": "yes"}]',
            "[" * 100000,
        ],
    )
    def test_malformed_data_fails_soft(self, raw):
        kv = InMemoryKeyValueStore({DEFAULT_HISTORY_KEY: raw})
        store = HistoryStore(kv)

        assert store.load() == ()

        store.record("a?", "yes")
        assert json.loads(kv.get(DEFAULT_HISTORY_KEY)) == [{"question": "a?", "answer": "yes"}]

    def test_custom_key(self):
        kv = InMemoryKeyValueStore()
        store = HistoryStore(kv, key="otra")
        store.load()
        store.record("a?", "yes")

        assert kv.get("otra") is not None
        assert kv.get(DEFAULT_HISTORY_KEY) is None

    def test_load_returns_entries(self):
        payload = json.dumps([{"question": "a?", "answer": "yes"}])
        store = HistoryStore(InMemoryKeyValueStore({DEFAULT_HISTORY_KEY: payload}))

        assert store.load() == (HistoryEntry(question="a?", answer="yes"),)
