from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "chord-compass"
    LOG_LEVEL: str = "INFO"

    # Fretboard geometry used by the solvers.
    # FRET_COUNT bounds the sliding window; MAX_FRET bounds adapted shapes.
    FRET_COUNT: int = 12
    MAX_HAND_SPAN: int = 4
    MAX_FRET: int = 24

    # Guitar tuning preset (standard|drop_d|open_g|dadgad|half_step_down|...)
    GUITAR_TUNING: str = "standard"

    # Result sizes handed to the UI
    BEST_VOICINGS_LIMIT: int = 12
    KEY_MATCH_LIMIT: int = 8
    SUGGESTION_DISPLAY_LIMIT: int = 8


settings = Settings()


def setting_int(name: str, default: int) -> int:
    """Integer setting by name; `default` only when the setting is absent."""
    return int(getattr(settings, name, default))
