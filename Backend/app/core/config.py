import os
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file from the project root, independent of the working directory.
_config_dir = os.path.dirname(os.path.abspath(__file__))
_backend_dir = os.path.dirname(os.path.dirname(_config_dir))
_project_root = os.path.dirname(_backend_dir)
_dotenv_path = os.path.join(_project_root, '.env')


class Settings(BaseSettings):
    DATABASE_URL: str
    SQL_ECHO: bool = False

    # Public URL used to build track hrefs
    BASE_URL: str = "http://localhost:8000"
    API_VERSION: str = "1.0"

    # JWT settings (tokens are issued elsewhere, we only verify them)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    model_config = SettingsConfigDict(
        env_file=_dotenv_path,
        env_file_encoding='utf-8',
        extra='ignore'
    )

settings = Settings()
