from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///./stall_pos.sqlite3"
    DB_ECHO: bool = False
    AUTO_CREATE_SCHEMA: bool = True

    BUSINESS_TIMEZONE: str = "America/Sao_Paulo"
    LOW_STOCK_THRESHOLD: int = 5
    REPORT_TOP_N: int = 5
    CURRENCY_SYMBOL: str = "R$"
    SHARE_PHONE: str = ""
    REQUIRE_CLIENT_NAME: bool = False

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @field_validator("BUSINESS_TIMEZONE")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value

    @property
    def business_tz(self) -> ZoneInfo:
        return ZoneInfo(self.BUSINESS_TIMEZONE)


settings = Settings()
