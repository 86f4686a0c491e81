from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from services.shared.utils import to_decimal


class StartCheckoutRequest(BaseModel):
    """購入開始リクエストモデル

    price は画面に表示していた金額。請求額には使わない。
    """

    passenger_name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    phone: str | None = Field(default=None, max_length=20)
    document_number: str | None = Field(default=None, max_length=50)
    origin: str = Field(..., min_length=2)
    destination: str = Field(..., min_length=2)
    travel_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    departure_time: str = Field(..., pattern=r"^([01]?\d|2[0-3]):[0-5]\d$")
    seat: int = Field(..., ge=1, strict=True)
    price: Decimal | None = Field(default=None, description="クライアント表示金額（参考値）")

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        if v is None:
            return v
        return to_decimal(v)


class CancelBookingRequest(BaseModel):
    """予約取消リクエストモデル"""

    reason: str | None = Field(default=None, max_length=500)


class AvailabilityQuery(BaseModel):
    """空席照会クエリ"""

    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    travel_date: str = Field(..., min_length=1, alias="date")
    departure_time: str = Field(..., min_length=1, alias="time")
