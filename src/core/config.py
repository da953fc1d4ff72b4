from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class ProfileSettings(BaseSettings):
    catalog_path: str = "assets/profile_catalog.yml"
    log_level: str = "INFO"
    label_width: int = 12
    chart_radius: float = 120.0
    chart_max_score: float = Field(50.0, gt=0) # max per component, scales the data polygon
    score_cache_ttl: int = 3600 # seconds, <= 0 disables the score cache

    model_config = SettingsConfigDict(env_prefix='PROFILE_')

class RedisSettings(BaseSettings):
    url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")

# Instantiate settings
profile_settings = ProfileSettings()
redis_settings = RedisSettings()
