from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Cinema Seat Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = False  # Enables arg/return tracing and the rotating file sink

    # Booking API
    BOOKING_API_BASE_URL: str = 'http://localhost:8000'
    BOOKING_API_TOKEN: SecretStr = SecretStr('')
    BOOKING_API_TIMEOUT_SECONDS: float = 10.0

    # Showtime pricing fallback (whole currency units)
    DEFAULT_STANDARD_PRICE: int = 400
    DEFAULT_PREMIUM_PRICE: int = 700

    # Role recorded on cancellations when the caller does not pass one
    DEFAULT_CANCELLED_BY: str = 'admin'

    @field_validator('BOOKING_API_BASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip('/')
        return v

    @field_validator('DEFAULT_STANDARD_PRICE', 'DEFAULT_PREMIUM_PRICE')
    @classmethod
    def non_negative_price(cls, v: int) -> int:
        if v < 0:
            raise ValueError('prices must be non-negative')
        return v


settings = Settings()  # type: ignore
