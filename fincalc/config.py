"""Runtime settings read from the environment (and a local ``.env`` file)."""

from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


class Settings(BaseModel):
    cors_origins: List[str] = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))
    log_level: str = "INFO"
    debug: bool = False
    port: int = Field(5000, ge=1, le=65535)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = os.getenv("FINCALC_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        return cls(
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            log_level=os.getenv("FINCALC_LOG_LEVEL", "INFO").upper(),
            debug=os.getenv("FINCALC_DEBUG", "0").lower() in ("1", "true", "yes"),
            port=int(os.getenv("FINCALC_PORT", "5000")),
        )
