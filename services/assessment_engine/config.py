from pydantic_settings import BaseSettings, SettingsConfigDict
import os

from services.assessment_engine.loader import DEFAULT_CATALOG_PATH
from services.assessment_engine.models import ArchetypeMode

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()


class EngineSettings(BaseSettings):
    catalog_path: str = str(DEFAULT_CATALOG_PATH)
    archetype_mode: ArchetypeMode = ArchetypeMode.FORCED_CHOICE
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='ASSESSMENT_')


def get_settings() -> EngineSettings:
    """Reads settings from the environment on every call."""
    return EngineSettings()
