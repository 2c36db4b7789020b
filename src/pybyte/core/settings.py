from pydantic_settings import BaseSettings, SettingsConfigDict

from pybyte.core.constants import DEFAULT_ARTIFACT_SUFFIX, DEFAULT_LOADER_PATTERN


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PYBYTE_",
        case_sensitive=True,
        extra="ignore"
    )

    # --- LOGGING ---
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False

    # --- STDIN COMPILE ---
    STDIN_CHUNK_SIZE: int = 64 * 1024
    # 0 disables the cap.
    STDIN_MAX_BYTES: int = 64 * 1024 * 1024  # 64MB

    # --- COMPILER ---
    ARTIFACT_SUFFIX: str = DEFAULT_ARTIFACT_SUFFIX
    LOADER_PATTERN: str = DEFAULT_LOADER_PATTERN
    OPTIMIZE: int = -1


settings = Settings()
