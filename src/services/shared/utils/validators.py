import re
from datetime import date, datetime
from decimal import Decimal

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# 24時間表記 HH:MM（先頭ゼロ省略可）
TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{8,20}$")


def to_decimal(v: object) -> Decimal:
    """任意の値を Decimal に変換する

    Pydantic の field_validator (mode="before") から呼び出すことを想定。
    すでに Decimal の場合はそのまま返し、それ以外は str 経由で変換する。
    """
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


def parse_travel_date(value: str) -> date:
    """YYYY-MM-DD 形式の日付を解析する"""
    if not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid travel date: {value}. Expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid travel date: {value}") from e


def parse_departure_time(value: str) -> tuple[int, int]:
    """HH:MM 形式の出発時刻を (時, 分) に解析する"""
    if not TIME_PATTERN.match(value):
        raise ValueError(f"Invalid departure time: {value}. Expected HH:MM")
    hour, minute = value.split(":")
    return int(hour), int(minute)


def combine_departure(travel_date: str, departure_time: str) -> datetime:
    """日付と出発時刻から naive な datetime を組み立てる"""
    hour, minute = parse_departure_time(departure_time)
    return datetime.combine(parse_travel_date(travel_date), datetime.min.time()).replace(
        hour=hour, minute=minute
    )


def canonical_time(value: str) -> str:
    """解析できる時刻は "HH:MM" に揃える。解析できなければ空白除去のみ"""
    stripped = (value or "").strip()
    try:
        hour, minute = parse_departure_time(stripped)
    except ValueError:
        return stripped
    return f"{hour:02d}:{minute:02d}"
