from os import getenv


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://taskpad:taskpad@db:5432/taskpad")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "10080"))  # 7 jours
    AUTH_COOKIE_NAME = getenv("AUTH_COOKIE_NAME", "token")
    APP_ENV = getenv("APP_ENV", "development")
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


settings = Settings()
