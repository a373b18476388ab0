# backend/lapor_sarpras/core/config.py

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = "dev"

    database_url: str = "sqlite:///./lapor_sarpras.db"

    # Put this on the host as JWT_SECRET_KEY
    jwt_secret_key: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # comma-separated allowlist, falls back to FRONTEND_URL/local
    cors_origins: str = ""
    frontend_url: str = "http://localhost:3000"

    upload_dir: str = "./uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    log_level: str = "INFO"

    # dev conveniences (migrations own the schema in prod)
    auto_create_tables: bool = True
    seed_demo_users: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def allow_origins(self) -> List[str]:
        if self.cors_origins.strip():
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return list({self.frontend_url.strip(), "http://localhost:3000"})


settings = Settings()
