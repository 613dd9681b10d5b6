"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Core settings shared by the stores, geometry and workspace."""

    # History
    HISTORY_LIMIT: int = 50  # Max undo entries per project type

    # Limits
    MAX_TABS: int = 10
    MAX_FRAMES_PER_CAROUSEL: int = 20
    MAX_SECTIONS_PER_EBLAST: int = 15

    # Geometry steps
    NUDGE_STEP: float = 0.02
    NUDGE_STEP_LARGE: float = 0.1  # With modifier key held
    ZOOM_STEP: float = 0.1
    ROTATION_STEP: float = 90.0  # Degrees
    OPACITY_STEP: float = 0.1
    BORDER_RADIUS_STEP: float = 4.0  # Pixels

    # Defaults for new frames
    DEFAULT_FILL_COLOR: str = "#6466e9"
    DEFAULT_FRAME_STYLE: str = "dark-single-pin"
    DEFAULT_FRAME_SIZE: str = "portrait"

    model_config = {"env_prefix": "SLIDEFORGE_"}


settings = Settings()
