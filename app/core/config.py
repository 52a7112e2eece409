from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Формат тела статьи по умолчанию
    default_body_format: str = "basic_html"

    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    sql_echo: bool = False
    auto_create_tables: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
