import json
import os
import tempfile
from pathlib import Path

from aws_lambda_powertools import Logger
from filelock import FileLock, Timeout

from services.shared.domain.exception import PersistenceException
from services.shared.domain.repository import Transaction

from .in_memory_key_value_store import InMemoryKeyValueStore

logger = Logger(child=True)

# まだファイルを読み込んでいないことを表す
_NOT_LOADED = object()


class JsonFileKeyValueStore(InMemoryKeyValueStore):
    """JSON ファイルに永続化する KeyValueStore の具象実装

    全コレクションを1つの JSON ドキュメントとして保存する。
    コミットはファイルロック（store.json.lock）を取得した状態で
    最新のファイルを読み直してから条件を判定し、一時ファイル経由で置き換える。
    そのため同じ DATA_DIR を共有する複数プロセスの間でも条件付き書き込みが成立する。
    ファイル書き込みに失敗した場合はメモリ上の変更も巻き戻す。
    """

    FILE_NAME = "store.json"
    LOCK_TIMEOUT_SECONDS = 10.0

    def __init__(self, data_dir: str | Path) -> None:
        super().__init__()
        self._path = Path(data_dir) / self.FILE_NAME
        self._file_lock = FileLock(
            f"{self._path}.lock", timeout=self.LOCK_TIMEOUT_SECONDS
        )
        self._signature: object = _NOT_LOADED
        self._refresh()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, collection: str, key: str) -> dict | None:
        self._refresh()
        return super().get(collection, key)

    def scan(self, collection: str) -> list[dict]:
        self._refresh()
        return super().scan(collection)

    def commit(self, transaction: Transaction) -> None:
        if transaction.is_empty():
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self._file_lock:
                self._refresh()
                super().commit(transaction)
        except Timeout as e:
            raise PersistenceException(
                f"Timed out waiting for store lock: {self._file_lock.lock_file}"
            ) from e

    def _refresh(self) -> None:
        """他プロセスがファイルを更新していれば読み直す"""
        with self._lock:
            signature = self._stat_signature()
            if signature == self._signature:
                return
            self._collections = self._load()
            self._signature = signature

    def _stat_signature(self) -> tuple[int, int, int] | None:
        try:
            stat = os.stat(self._path)
        except FileNotFoundError:
            return None
        return stat.st_ino, stat.st_mtime_ns, stat.st_size

    def _load(self) -> dict[str, dict[str, dict]]:
        if not self._path.exists():
            logger.info(
                "Store file not found, starting empty", extra={"path": str(self._path)}
            )
            return {}
        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceException(
                f"Failed to load store file: {self._path}"
            ) from e
        logger.debug(
            "Store file loaded",
            extra={"path": str(self._path), "collections": sorted(data)},
        )
        return data

    def _flush(self) -> None:
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent, prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._dump(), f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.exception(
                "Failed to write store file", extra={"path": str(self._path)}
            )
            raise PersistenceException(
                f"Failed to write store file: {self._path}"
            ) from e
        self._signature = self._stat_signature()
