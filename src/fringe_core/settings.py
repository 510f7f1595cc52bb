from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Depth used when none is given; 13 levels hold 4096 leaves
    height: int = Field(default=13, ge=1, alias="FRINGE_HEIGHT")
    hash_alg: str = Field(default="sha256", alias="FRINGE_HASH_ALG")

    signing_key_path: str = Field(
        default="./keys/ed25519_private.key", alias="FRINGE_SIGNING_KEY_PATH"
    )
    signing_pubkey_path: str = Field(
        default="./keys/ed25519_public.key", alias="FRINGE_SIGNING_PUBKEY_PATH"
    )
    allow_dev_keygen: bool = Field(default=False, alias="FRINGE_ALLOW_DEV_KEYGEN")

    log_level: str = Field(default="INFO", alias="FRINGE_LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()  # load at import
