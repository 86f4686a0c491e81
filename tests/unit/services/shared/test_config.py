from services.shared.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "STORE_BACKEND",
            "CURRENCY",
            "FRONTEND_BASE_URL",
            "PENDING_BOOKING_TTL_MINUTES",
            "CANCELLATION_CUTOFF_HOURS",
            "TIMEZONE",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.store_backend == "dynamodb"
        assert settings.currency == "MXN"
        assert settings.pending_booking_ttl_minutes == 30
        assert settings.cancellation_cutoff_hours == 2
        assert settings.timezone == "America/Mexico_City"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "JSON")
        monkeypatch.setenv("DATA_DIR", "/tmp/booking")
        monkeypatch.setenv("CURRENCY", "usd")
        monkeypatch.setenv("FRONTEND_BASE_URL", "https://bus.example.com/")
        monkeypatch.setenv("PENDING_BOOKING_TTL_MINUTES", "15")

        settings = Settings.from_env()

        assert settings.store_backend == "json"
        assert settings.data_dir == "/tmp/booking"
        assert settings.currency == "USD"
        assert settings.pending_booking_ttl_minutes == 15
        assert settings.success_url == (
            "https://bus.example.com/index.html"
            "?success=true&session_id={CHECKOUT_SESSION_ID}"
        )
        assert settings.cancel_url == "https://bus.example.com/index.html?canceled=true"
