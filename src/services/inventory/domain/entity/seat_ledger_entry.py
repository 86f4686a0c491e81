from services.shared.domain import AggregateRoot, TripKey


class SeatLedgerEntry(AggregateRoot[TripKey]):
    """便ごとの使用中座席の集合

    初回の確保時に生成され、削除されることはない。
    解放しても座席が集合から外れるだけでエントリ自体は残る。
    """

    def __init__(
        self,
        id: TripKey,
        occupied: frozenset[str] = frozenset(),
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        self._occupied = set(occupied)

    @property
    def trip_key(self) -> TripKey:
        return self._id

    @property
    def occupied(self) -> frozenset[str]:
        return frozenset(self._occupied)

    @property
    def is_new(self) -> bool:
        """まだ一度も永続化されていないエントリかどうか"""
        return self._version == 0

    def is_occupied(self, seat: str) -> bool:
        return seat in self._occupied

    def occupy(self, seat: str) -> bool:
        """座席を使用中にする。すでに使用中なら False"""
        if seat in self._occupied:
            return False
        self._occupied.add(seat)
        return True

    def vacate(self, seat: str) -> bool:
        """座席を解放する。もともと空いていれば False"""
        if seat not in self._occupied:
            return False
        self._occupied.discard(seat)
        return True
