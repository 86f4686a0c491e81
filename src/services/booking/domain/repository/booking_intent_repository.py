from abc import abstractmethod

from services.booking.domain.entity import BookingIntent
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingReference
from services.shared.domain import Repository


class BookingIntentRepository(Repository[BookingIntent, BookingReference]):
    """予約リポジトリのインターフェース

    主キーは決済セッション ID。予約番号からは索引経由で検索する。
    """

    @abstractmethod
    def find_by_session_id(self, session_id: str) -> BookingIntent | None:
        """決済セッション ID で検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: BookingStatus) -> list[BookingIntent]:
        """ステータスで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_awaiting_refund(self) -> list[BookingIntent]:
        """返金が未記録の予約を検索する"""
        raise NotImplementedError
