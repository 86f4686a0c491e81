from dataclasses import dataclass

from services.shared.utils.validators import EMAIL_PATTERN, PHONE_PATTERN


@dataclass(frozen=True)
class Passenger:
    """乗客情報

    name: 2〜100 文字
    email: 小文字に正規化して保持
    phone / document_number: 任意
    """

    name: str
    email: str
    phone: str | None = None
    document_number: str | None = None

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        if not 2 <= len(name) <= 100:
            raise ValueError("Passenger name must be between 2 and 100 characters")
        email = (self.email or "").strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValueError(f"Invalid email: {self.email}")
        phone = self.phone.strip() if self.phone else None
        if phone is not None and not PHONE_PATTERN.match(phone):
            raise ValueError(f"Invalid phone number: {self.phone}")
        document_number = (
            self.document_number.strip() if self.document_number else None
        )

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "email", email)
        object.__setattr__(self, "phone", phone)
        object.__setattr__(self, "document_number", document_number or None)
