from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- network ---
    host: str = "127.0.0.1"
    port: int = 8080

    # --- collector ---
    collect_interval: float = 5.0  # seconds between sample cycles

    # --- sink ---
    buffer_size: int = 1024  # bytes read per connection
    ack_message: str = "Data received\n"

    # --- logging ---
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "RELAY_"}


settings = Settings()
