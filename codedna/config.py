from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Scanner Configuration
    supported_extensions: str = Field(default=".js,.jsx,.ts,.tsx,.py")
    ignored_dirs: str = Field(
        default="node_modules,.git,__pycache__,.next,dist,build,coverage,.venv,venv,env"
    )
    max_file_size: int = Field(default=10 * 1024 * 1024)
    max_workers: int = Field(default=4)

    # Import Resolution Configuration
    resolve_extensions: str = Field(default=".js,.jsx,.ts,.tsx")
    index_extensions: str = Field(default=".js,.ts,.jsx,.tsx")

    # Analytics Configuration
    top_n: int = Field(default=10)
    pagerank_damping: float = Field(default=0.85)
    pagerank_iterations: int = Field(default=20)

    # API Configuration
    api_host: str = Field(default="localhost")
    api_port: int = Field(default=8000)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="logs/app.log")

    @staticmethod
    def _split(value: str) -> List[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def supported_extensions_list(self) -> List[str]:
        """Get supported extensions as a list."""
        return self._split(self.supported_extensions)

    @property
    def ignored_dirs_list(self) -> List[str]:
        """Get ignored directory names as a list."""
        return self._split(self.ignored_dirs)

    @property
    def resolve_extensions_list(self) -> List[str]:
        return self._split(self.resolve_extensions)

    @property
    def index_extensions_list(self) -> List[str]:
        return self._split(self.index_extensions)


settings = Settings()
