from abc import abstractmethod

from services.booking.domain.entity import Ticket
from services.shared.domain import Repository


class TicketRepository(Repository[Ticket, str]):
    """乗車券リポジトリのインターフェース（キーは決済セッション ID）"""

    @abstractmethod
    def find_all(self) -> list[Ticket]:
        """全乗車券を取得する"""
        raise NotImplementedError
