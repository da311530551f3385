from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Asset Tracker"
    DATABASE_URL: str = "sqlite:///./data/assets.db"

    # Security
    PASSWORD_PEPPER: str = ""
    ARGON2_TIME_COST: int = 2
    ARGON2_MEMORY_COST: int = 102400
    ARGON2_PARALLELISM: int = 8

    # Reference data: departments are static, IT is the only admin department
    ADMIN_DEPARTMENT_ID: int = 5
    UNASSIGNED_EMPLOYEE_ID: int = 1

    # Optional bootstrap administrator
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    # NIST NVD
    NVD_API_URL: str = "https://services.nvd.nist.gov/rest/json/cves/2.0"
    NVD_API_KEY: str | None = None
    NVD_TIMEOUT_SECONDS: int = 60

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
