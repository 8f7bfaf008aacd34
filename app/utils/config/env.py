from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "user-management"
    environment: str = "local"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api/users"
    # Peers whose X-Forwarded-For header is believed when recording client IPs.
    trusted_proxies: list[str] = []

    mongo_port: int = 27017
    mongo_host: str = "localhost"
    mongo_db: str = "user_management"
    mongo_password: str | None = None
    mongo_params: str | None = None
    mongo_user: str | None = None
    mongo_srv: bool = False

    jwt_algorithm: str = "HS256"
    jwt_secret_key: str = "very-secret-key"
    token_expires_days: int = 30
    bcrypt_rounds: int = 12

    bootstrap_admin_username: str = "superadmin"
    bootstrap_admin_password: str | None = None
    bootstrap_admin_full_name: str = "Super Admin"
    bootstrap_admin_email: str | None = None

    model_config = SettingsConfigDict(env_file=(".env",), case_sensitive=False)

    @property
    def mongo_uri(self) -> str:
        auth = ""
        if self.mongo_user and self.mongo_password:
            auth = f"{self.mongo_user}:{self.mongo_password}@"
        params = f"?{self.mongo_params}" if self.mongo_params else ""
        if self.mongo_srv:
            return f"mongodb+srv://{auth}{self.mongo_host}/{self.mongo_db}{params}"
        return f"mongodb://{auth}{self.mongo_host}:{self.mongo_port}/{self.mongo_db}{params}"
