from services.route.domain.value_object import RouteKey, Schedule
from services.shared.domain import AggregateRoot
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)


class Route(AggregateRoot[RouteKey]):
    """路線

    出発時刻順に並んだ時刻表と、車両の座席数を持つ。
    予約処理からは運賃と座席数を参照するだけの読み取り専用データとして扱う。
    """

    DEFAULT_TOTAL_SEATS = 48

    def __init__(
        self,
        id: RouteKey,
        origin: str,
        destination: str,
        duration: str,
        distance: str = "N/A",
        total_seats: int = DEFAULT_TOTAL_SEATS,
        schedules: list[Schedule] | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        self._origin = origin.strip()
        self._destination = destination.strip()
        self._duration = duration
        self._distance = distance
        self._total_seats = total_seats
        self._schedules: list[Schedule] = sorted(
            schedules or [], key=lambda s: s.departure_time
        )

        self._validate()

    def _validate(self) -> None:
        if self._total_seats <= 0:
            raise BusinessRuleViolationException("Total seats must be positive")
        times = [s.departure_time for s in self._schedules]
        if len(times) != len(set(times)):
            raise BusinessRuleViolationException(
                "Schedules must have distinct departure times"
            )

    @property
    def route_key(self) -> RouteKey:
        return self._id

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def duration(self) -> str:
        return self._duration

    @property
    def distance(self) -> str:
        return self._distance

    @property
    def total_seats(self) -> int:
        return self._total_seats

    @property
    def schedules(self) -> list[Schedule]:
        return list(self._schedules)

    def find_schedule(self, departure_time: str) -> Schedule | None:
        """出発時刻で時刻表を検索する"""
        for schedule in self._schedules:
            if schedule.departs_at(departure_time):
                return schedule
        return None

    def add_schedule(self, schedule: Schedule) -> None:
        """時刻表を追加する"""
        if self.find_schedule(schedule.departure_time) is not None:
            raise BusinessRuleViolationException(
                f"Schedule at {schedule.departure_time} already exists on {self._id}"
            )
        self._schedules.append(schedule)
        self._schedules.sort(key=lambda s: s.departure_time)

    def replace_schedule(self, schedule: Schedule) -> None:
        """同じ schedule_id の時刻表を置き換える"""
        index = self._index_of(schedule.schedule_id)
        for other in self._schedules:
            if other.schedule_id != schedule.schedule_id and other.departs_at(
                schedule.departure_time
            ):
                raise BusinessRuleViolationException(
                    f"Schedule at {schedule.departure_time} already exists on {self._id}"
                )
        self._schedules[index] = schedule
        self._schedules.sort(key=lambda s: s.departure_time)

    def remove_schedule(self, schedule_id: int) -> Schedule:
        """時刻表を削除する"""
        return self._schedules.pop(self._index_of(schedule_id))

    def get_schedule(self, schedule_id: int) -> Schedule:
        return self._schedules[self._index_of(schedule_id)]

    def next_schedule_id(self) -> int:
        """採番用: 既存の最大 ID + 1"""
        return max((s.schedule_id for s in self._schedules), default=0) + 1

    def _index_of(self, schedule_id: int) -> int:
        for index, schedule in enumerate(self._schedules):
            if schedule.schedule_id == schedule_id:
                return index
        raise ResourceNotFoundException(
            f"Schedule not found: {schedule_id} on {self._id}"
        )
