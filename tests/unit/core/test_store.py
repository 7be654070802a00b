"""Tests for TransactionStore and FetchChannel."""

import threading
import time

import pytest

from soltools.core.store import (
    FetchChannel,
    FetchFinished,
    FetchOutcome,
    FetchResult,
    FetchStarted,
    PageFetched,
    TransactionStore,
)
from tests.factories.transaction import make_history


class TestTransactionStore:
    """Tests for TransactionStore operations."""

    @pytest.mark.unit
    def test_starts_empty_and_idle(self) -> None:
        store = TransactionStore()

        assert store.snapshot_length() == 0
        assert store.iterate() == []
        assert store.is_fetching() is False

    @pytest.mark.unit
    def test_append_preserves_order(self) -> None:
        store = TransactionStore()
        history = make_history(5)

        store.append(history[:2])
        store.append(history[2:])

        assert [tx.signature for tx in store.iterate()] == [tx.signature for tx in history]

    @pytest.mark.unit
    def test_replace_with_drops_previous_content(self) -> None:
        store = TransactionStore()
        store.append(make_history(3))
        page = make_history(1)

        store.replace_with(page)

        assert store.snapshot_length() == 1
        assert store.iterate()[0].signature == page[0].signature

    @pytest.mark.unit
    def test_iterate_returns_a_copy(self) -> None:
        store = TransactionStore()
        store.append(make_history(2))

        snapshot = store.iterate()
        snapshot.clear()

        assert store.snapshot_length() == 2

    @pytest.mark.unit
    def test_non_blocking_reads_return_none_when_locked(self) -> None:
        store = TransactionStore()
        store.append(make_history(2))

        store._lock.acquire()
        try:
            assert store.snapshot_length(blocking=False) is None
            assert store.iterate(blocking=False) is None
            assert store.is_fetching(blocking=False) is None
        finally:
            store._lock.release()

        assert store.snapshot_length(blocking=False) == 2

    @pytest.mark.unit
    def test_revision_bumps_on_every_write(self) -> None:
        store = TransactionStore()
        start = store.revision

        store.append([])
        store.replace_with([])
        store.clear()

        assert store.revision == start + 3

    @pytest.mark.unit
    def test_fetching_flag(self) -> None:
        store = TransactionStore()

        store.set_fetching(True)
        assert store.is_fetching() is True

        store.set_fetching(False)
        assert store.is_fetching() is False


class TestFetchChannel:
    """Tests for FetchChannel.drain_into()."""

    @pytest.mark.unit
    def test_drain_empty_channel(self) -> None:
        store = TransactionStore()

        assert FetchChannel().drain_into(store) is None
        assert store.snapshot_length() == 0

    @pytest.mark.unit
    def test_first_page_replaces_later_pages_append(self) -> None:
        store = TransactionStore()
        store.append(make_history(7))  # left over from an earlier session
        history = make_history(4)
        channel = FetchChannel()

        channel.send(FetchStarted(address="addr"))
        channel.send(PageFetched(transactions=history[:2], replace=True))
        channel.send(PageFetched(transactions=history[2:]))
        result = channel.drain_into(store)

        assert result is None
        assert store.is_fetching() is True
        assert [tx.signature for tx in store.iterate()] == [tx.signature for tx in history]

    @pytest.mark.unit
    def test_finished_clears_flag_and_returns_result(self) -> None:
        store = TransactionStore()
        channel = FetchChannel()
        finished = FetchResult(outcome=FetchOutcome.COMPLETED, pages=1, transactions=0)

        channel.send(FetchStarted(address="addr"))
        channel.send(PageFetched(transactions=[], replace=True))
        channel.send(FetchFinished(result=finished))

        assert channel.drain_into(store) == finished
        assert store.is_fetching() is False
        assert channel.drain_into(store) is None

    @pytest.mark.unit
    def test_concurrent_drains_keep_page_order(self) -> None:
        replacing = threading.Event()

        class SlowReplaceStore(TransactionStore):
            def replace_with(self, page):
                replacing.set()
                time.sleep(0.2)
                super().replace_with(page)

        store = SlowReplaceStore()
        history = make_history(4)
        channel = FetchChannel()
        channel.send(PageFetched(transactions=history[:2], replace=True))
        channel.send(PageFetched(transactions=history[2:]))

        first = threading.Thread(target=channel.drain_into, args=(store,))
        first.start()
        assert replacing.wait(timeout=5.0)
        second = threading.Thread(target=channel.drain_into, args=(store,))
        second.start()
        first.join(timeout=5.0)
        second.join(timeout=5.0)

        assert [tx.signature for tx in store.iterate()] == [tx.signature for tx in history]


class TestFetchResult:
    """Tests for FetchResult.describe()."""

    @pytest.mark.unit
    def test_completed(self) -> None:
        result = FetchResult(outcome=FetchOutcome.COMPLETED, pages=3, transactions=250)
        assert result.describe() == "Completed: 250 transactions in 3 pages"

    @pytest.mark.unit
    def test_partially_completed_mentions_reason(self) -> None:
        result = FetchResult(
            outcome=FetchOutcome.PARTIALLY_COMPLETED,
            pages=2,
            transactions=200,
            reason="HTTP 429",
        )
        assert "200 transactions" in result.describe()
        assert "HTTP 429" in result.describe()

    @pytest.mark.unit
    def test_failed(self) -> None:
        result = FetchResult(outcome=FetchOutcome.FAILED, reason="HTTP 401")
        assert result.describe() == "Failed: HTTP 401"
