import os
from dataclasses import dataclass

DEFAULT_MODEL_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.0-flash-001"


@dataclass(frozen=True)
class Settings:
    model_url: str = DEFAULT_MODEL_URL
    model: str = DEFAULT_MODEL
    api_key: str | None = None
    timeout_seconds: float = 30.0
    form_ttl_seconds: int = 3600
    max_forms: int = 1000
    log_level: str = "INFO"


def _positive(name: str, default: str, cast: type[int] | type[float]) -> int | float:
    raw = os.getenv(name, default)
    try:
        value = cast(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise RuntimeError(f"{name} must be greater than zero")
    return value


def load_settings() -> Settings:
    """Read settings from the environment.

    Call ``dotenv.load_dotenv()`` first if values should come from a ``.env`` file.
    """
    return Settings(
        model_url=os.getenv("TRANSLATEPAL_MODEL_URL", DEFAULT_MODEL_URL),
        model=os.getenv("TRANSLATEPAL_MODEL", DEFAULT_MODEL),
        api_key=os.getenv("TRANSLATEPAL_API_KEY") or None,
        timeout_seconds=_positive("TRANSLATEPAL_TIMEOUT_SECONDS", "30", float),
        form_ttl_seconds=_positive("TRANSLATEPAL_FORM_TTL_SECONDS", "3600", int),
        max_forms=_positive("TRANSLATEPAL_MAX_FORMS", "1000", int),
        log_level=os.getenv("TRANSLATEPAL_LOG_LEVEL", "INFO").upper(),
    )
