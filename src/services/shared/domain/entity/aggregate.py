from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """AggregateRoot 基底クラス

    - 配下のエンティティへのアクセスは必ず集約ルートを経由
    - トランザクション境界 = 集約境界
    - version は楽観ロック用（永続化層が条件付き書き込みに利用する）
    """

    def __init__(self, id: ID, version: int = 0) -> None:
        super().__init__(id)
        self._version = version

    @property
    def version(self) -> int:
        return self._version
