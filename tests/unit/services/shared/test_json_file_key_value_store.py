import json
import os
from concurrent.futures import ThreadPoolExecutor

import pytest

from services.inventory.applications.seat_ledger import SeatLedger
from services.inventory.domain.enum import ClaimResult
from services.inventory.infrastructure.key_value_seat_ledger_repository import (
    KeyValueSeatLedgerRepository,
)
from services.shared.domain.exception import (
    PersistenceException,
    TransactionConflictException,
)
from services.shared.infrastructure import JsonFileKeyValueStore


class TestJsonFileKeyValueStore:
    def test_records_survive_reload(self, tmp_path):
        """再生成したストアからも書き込んだレコードを読める"""
        store = JsonFileKeyValueStore(data_dir=str(tmp_path))
        store.put("tickets", "cs_1", {"seat": 12})

        reloaded = JsonFileKeyValueStore(data_dir=str(tmp_path))

        assert reloaded.get("tickets", "cs_1") == {"seat": 12}

    def test_missing_file_starts_empty(self, tmp_path):
        store = JsonFileKeyValueStore(data_dir=str(tmp_path / "new"))

        assert store.scan("tickets") == []

    def test_conflicting_commit_does_not_touch_file(self, tmp_path):
        store = JsonFileKeyValueStore(data_dir=str(tmp_path))
        store.put("c", "k", {"v": 1})

        with pytest.raises(TransactionConflictException):
            store.commit(store.transaction().put("c", "k", {"v": 2}, if_absent=True))

        reloaded = JsonFileKeyValueStore(data_dir=str(tmp_path))
        assert reloaded.get("c", "k") == {"v": 1}

    def test_corrupted_file_raises_persistence_exception(self, tmp_path):
        (tmp_path / "store.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceException):
            JsonFileKeyValueStore(data_dir=str(tmp_path))

    def test_failed_write_rolls_back_memory(self, tmp_path, monkeypatch):
        """ファイル書き込みに失敗した場合はメモリ上の状態も元に戻る"""
        store = JsonFileKeyValueStore(data_dir=str(tmp_path))
        store.put("c", "k", {"v": 1})

        def failing_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(PersistenceException):
            store.put("c", "k", {"v": 2})

        assert store.get("c", "k") == {"v": 1}
        assert not [p for p in os.listdir(tmp_path) if p.startswith(".store-")]
        with open(tmp_path / "store.json", encoding="utf-8") as f:
            assert json.load(f)["c"]["k"] == {"v": 1}


class TestJsonFileKeyValueStoreSharedDirectory:
    """同じ DATA_DIR を共有する複数ワーカー（ストアインスタンス）"""

    def test_writes_are_visible_to_other_instances(self, tmp_path):
        first = JsonFileKeyValueStore(data_dir=str(tmp_path))
        second = JsonFileKeyValueStore(data_dir=str(tmp_path))

        first.put("c", "k", {"v": 1})

        assert second.get("c", "k") == {"v": 1}
        assert second.scan("c") == [{"v": 1}]

    def test_conditions_are_checked_against_latest_file(self, tmp_path):
        first = JsonFileKeyValueStore(data_dir=str(tmp_path))
        second = JsonFileKeyValueStore(data_dir=str(tmp_path))
        first.put("c", "k", {"v": 1})

        with pytest.raises(TransactionConflictException):
            second.commit(second.transaction().put("c", "k", {"v": 2}, if_absent=True))

        assert first.get("c", "k") == {"v": 1}

    def test_commits_from_both_instances_are_kept(self, tmp_path):
        first = JsonFileKeyValueStore(data_dir=str(tmp_path))
        second = JsonFileKeyValueStore(data_dir=str(tmp_path))

        first.put("c", "a", {"v": 1})
        second.put("c", "b", {"v": 2})

        reloaded = JsonFileKeyValueStore(data_dir=str(tmp_path))
        assert reloaded.get("c", "a") == {"v": 1}
        assert reloaded.get("c", "b") == {"v": 2}

    def test_same_seat_is_sold_once_across_instances(self, tmp_path, trip_key):
        ledgers = []
        for _ in range(2):
            store = JsonFileKeyValueStore(data_dir=str(tmp_path))
            ledgers.append(SeatLedger(KeyValueSeatLedgerRepository(store), store))

        results = [ledger.claim(trip_key, "12") for ledger in ledgers]

        assert results.count(ClaimResult.SUCCESS) == 1
        assert results.count(ClaimResult.ALREADY_OCCUPIED) == 1
        assert ledgers[0].occupied_seats(trip_key) == frozenset({"12"})

    def test_concurrent_claims_across_instances(self, tmp_path, trip_key):
        ledgers = []
        for _ in range(4):
            store = JsonFileKeyValueStore(data_dir=str(tmp_path))
            ledgers.append(SeatLedger(KeyValueSeatLedgerRepository(store), store))

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(
                executor.map(lambda ledger: ledger.claim(trip_key, "48"), ledgers * 3)
            )

        assert results.count(ClaimResult.SUCCESS) == 1
        reloaded = JsonFileKeyValueStore(data_dir=str(tmp_path))
        assert SeatLedger(
            KeyValueSeatLedgerRepository(reloaded), reloaded
        ).occupied_seats(trip_key) == frozenset({"48"})
