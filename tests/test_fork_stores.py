"""Tests for provider/fork.py - fork stores and retry predicates."""

import json

import pytest

from localeprovider.enums import BufferFormat
from localeprovider.errors import DataError, DataErrorKind
from localeprovider.provider import (
    BlobDataStore,
    BufferResponse,
    DataKey,
    DataRequest,
    EmptyDataStore,
    ForkByErrorStore,
    ForkByKeyStore,
    MissingDataKeyPredicate,
    MissingLocalePredicate,
    MultiForkByErrorStore,
    export_blob,
)

DECIMAL = DataKey("decimal/symbols@1")
PLURALS = DataKey("plurals/cardinal@1")


class FailingStore:
    """Store that raises a fixed DataErrorKind and counts calls."""

    def __init__(self, kind: DataErrorKind) -> None:
        self.kind = kind
        self.calls = 0

    def load_buffer(self, request: DataRequest) -> BufferResponse:
        self.calls += 1
        raise self.kind.with_request(request)


class StaticStore:
    """Store that answers every request with the same payload."""

    def __init__(self, payload: dict[str, object]) -> None:
        self.payload = json.dumps(payload).encode("utf-8")
        self.calls = 0

    def load_buffer(self, request: DataRequest) -> BufferResponse:  # noqa: ARG002
        self.calls += 1
        return BufferResponse(self.payload, BufferFormat.JSON)


def _store(resources: dict[str, dict[str, dict[str, object]]]) -> BlobDataStore:
    return BlobDataStore.try_new_from_blob(export_blob(resources))


class TestPredicates:
    def test_missing_data_key(self) -> None:
        request = DataRequest(DECIMAL)
        predicate = MissingDataKeyPredicate()
        assert predicate.test(request, DataError(DataErrorKind.MISSING_DATA_KEY))
        assert not predicate.test(request, DataError(DataErrorKind.MISSING_LOCALE))

    def test_missing_locale(self) -> None:
        request = DataRequest(DECIMAL)
        predicate = MissingLocalePredicate()
        assert predicate.test(request, DataError(DataErrorKind.MISSING_LOCALE))
        assert not predicate.test(request, DataError(DataErrorKind.MISSING_DATA_KEY))


class TestForkByKey:
    """Second store consulted only when the first lacks the key."""

    def test_routes_by_key(self) -> None:
        fork = ForkByKeyStore(
            _store({"decimal/symbols@1": {"en": {"decimal": "."}}}),
            _store({"plurals/cardinal@1": {"en": {"one": "n = 1"}}}),
        )
        decimal = fork.load_buffer(DataRequest.for_locale(DECIMAL, "en"))
        plurals = fork.load_buffer(DataRequest.for_locale(PLURALS, "en"))
        assert json.loads(decimal.payload) == {"decimal": "."}
        assert json.loads(plurals.payload) == {"one": "n = 1"}

    def test_first_store_wins_when_both_have_key(self) -> None:
        second = StaticStore({"from": "second"})
        fork = ForkByKeyStore(StaticStore({"from": "first"}), second)
        response = fork.load_buffer(DataRequest(DECIMAL))
        assert json.loads(response.payload) == {"from": "first"}
        assert second.calls == 0

    def test_missing_locale_is_terminal(self) -> None:
        """A missing locale in the first store does not consult the second."""
        second = StaticStore({"from": "second"})
        fork = ForkByKeyStore(_store({"decimal/symbols@1": {"en": {}}}), second)
        with pytest.raises(DataError) as exc_info:
            fork.load_buffer(DataRequest.for_locale(DECIMAL, "fr"))
        assert exc_info.value.kind is DataErrorKind.MISSING_LOCALE
        assert second.calls == 0

    @pytest.mark.parametrize(
        "kind",
        [DataErrorKind.CUSTOM, DataErrorKind.IO, DataErrorKind.MISMATCHED_TYPE],
    )
    def test_other_errors_propagate_unmodified(self, kind: DataErrorKind) -> None:
        second = StaticStore({})
        fork = ForkByKeyStore(FailingStore(kind), second)
        with pytest.raises(DataError) as exc_info:
            fork.load_buffer(DataRequest(DECIMAL))
        assert exc_info.value.kind is kind
        assert second.calls == 0

    def test_second_result_returned_as_is(self) -> None:
        fork = ForkByKeyStore(EmptyDataStore(), FailingStore(DataErrorKind.IO))
        with pytest.raises(DataError) as exc_info:
            fork.load_buffer(DataRequest(DECIMAL))
        assert exc_info.value.kind is DataErrorKind.IO

    def test_both_missing_key(self) -> None:
        fork = ForkByKeyStore(EmptyDataStore(), EmptyDataStore())
        with pytest.raises(DataError) as exc_info:
            fork.load_buffer(DataRequest(DECIMAL))
        assert exc_info.value.kind is DataErrorKind.MISSING_DATA_KEY

    def test_accessors(self) -> None:
        first, second = EmptyDataStore(), EmptyDataStore()
        fork = ForkByKeyStore(first, second)
        assert fork.stores == (first, second)
        assert isinstance(fork.predicate, MissingDataKeyPredicate)
        assert "MissingDataKeyPredicate" in repr(fork)


class TestForkByLocale:
    """Second store consulted only when the first lacks the locale."""

    def test_routes_by_locale(self) -> None:
        fork = ForkByErrorStore(
            _store({"decimal/symbols@1": {"en": {"decimal": "."}}}),
            _store({"decimal/symbols@1": {"fr": {"decimal": ","}}}),
            MissingLocalePredicate(),
        )
        response = fork.load_buffer(DataRequest.for_locale(DECIMAL, "fr"))
        assert json.loads(response.payload) == {"decimal": ","}

    def test_missing_key_is_terminal(self) -> None:
        second = StaticStore({})
        fork = ForkByErrorStore(EmptyDataStore(), second, MissingLocalePredicate())
        with pytest.raises(DataError) as exc_info:
            fork.load_buffer(DataRequest(DECIMAL))
        assert exc_info.value.kind is DataErrorKind.MISSING_DATA_KEY
        assert second.calls == 0


class TestMultiFork:
    """N-way fork retrying on the predicate."""

    def test_requires_a_store(self) -> None:
        with pytest.raises(ValueError, match="at least one store"):
            MultiForkByErrorStore([], MissingDataKeyPredicate())

    def test_tries_stores_in_order(self) -> None:
        first = FailingStore(DataErrorKind.MISSING_DATA_KEY)
        second = FailingStore(DataErrorKind.MISSING_DATA_KEY)
        third = StaticStore({"from": "third"})
        fork = MultiForkByErrorStore([first, second, third], MissingDataKeyPredicate())
        response = fork.load_buffer(DataRequest(DECIMAL))
        assert json.loads(response.payload) == {"from": "third"}
        assert (first.calls, second.calls, third.calls) == (1, 1, 1)

    def test_stops_on_terminal_error(self) -> None:
        last = StaticStore({})
        fork = MultiForkByErrorStore(
            [FailingStore(DataErrorKind.MISSING_DATA_KEY), FailingStore(DataErrorKind.IO), last],
            MissingDataKeyPredicate(),
        )
        with pytest.raises(DataError) as exc_info:
            fork.load_buffer(DataRequest(DECIMAL))
        assert exc_info.value.kind is DataErrorKind.IO
        assert last.calls == 0

    def test_last_error_raised_when_all_fail(self) -> None:
        fork = MultiForkByErrorStore(
            [FailingStore(DataErrorKind.MISSING_LOCALE)] * 2 + [EmptyDataStore()],
            MissingLocalePredicate(),
        )
        with pytest.raises(DataError) as exc_info:
            fork.load_buffer(DataRequest(DECIMAL))
        assert exc_info.value.kind is DataErrorKind.MISSING_DATA_KEY

    def test_single_store(self) -> None:
        fork = MultiForkByErrorStore([StaticStore({"only": True})], MissingDataKeyPredicate())
        assert json.loads(fork.load_buffer(DataRequest(DECIMAL)).payload) == {"only": True}

    def test_push_returns_new_fork(self) -> None:
        fork = MultiForkByErrorStore([EmptyDataStore()], MissingDataKeyPredicate())
        extended = fork.push(StaticStore({"pushed": True}))
        assert len(fork.stores) == 1
        assert len(extended.stores) == 2
        assert json.loads(extended.load_buffer(DataRequest(DECIMAL)).payload) == {"pushed": True}
