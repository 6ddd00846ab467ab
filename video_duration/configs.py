from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"  # The logging level to use.
    max_movie_header_size: int = Field(
        4096, gt=0, description="Largest mvhd payload, in bytes, that will be read into memory."
    )

    class Config:
        env_file = ".env"
        env_prefix = "VIDEO_DURATION_"
        extra = "ignore"


settings = Settings()
