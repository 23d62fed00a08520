"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    radar_env: str = "development"
    radar_log_level: str = "info"

    # Reference point the display watches
    latitude: float = 47.41876326848794
    longitude: float = 8.426291132310645

    # Candidate filtering
    query_radius_km: float = 25.0  # ~50 km box around the reference point
    max_altitude_m: float = 6096.0  # 20,000 ft
    max_distance_km: float = 8.0

    # Upstream APIs
    opensky_client_id: str = ""
    opensky_client_secret: str = ""
    opensky_api_url: str = "https://opensky-network.org/api"
    opensky_token_url: str = (
        "https://auth.opensky-network.org/auth/realms/opensky-network"
        "/protocol/openid-connect/token"
    )
    adsbdb_api_url: str = "https://api.adsbdb.com/v0"
    planespotters_api_url: str = "https://api.planespotters.net/pub"
    http_timeout_s: float = 10.0
    user_agent: str = "Radar/0.1.0"

    # Fonts, first readable file wins
    font_regular_paths: list[str] = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
        "/usr/share/fonts/TTF/DejaVuSans.ttf",
    ]
    font_bold_paths: list[str] = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSansBold.ttf",
        "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    ]

    host: str = "0.0.0.0"
    port: int = 3000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def opensky_credentials(self) -> tuple[str, str] | None:
        if self.opensky_client_id and self.opensky_client_secret:
            return (self.opensky_client_id, self.opensky_client_secret)
        return None


settings = Settings()
