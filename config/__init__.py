import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def engine_from_env() -> dict:
    """Engine tuning knobs; unset variables fall back to the engine defaults."""
    keys = (
        "WFH_DISTANCE_THRESHOLD_M",
        "STANDARD_WORK_HOURS",
        "ADVANCE_NOTICE_DAYS",
        "DEFAULT_LATE_THRESHOLD",
    )
    return {key: os.getenv(key) for key in keys if os.getenv(key)}
