from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Optional
from functools import lru_cache
import warnings

from es_metrics.domain.models import RollingIndexType


# Characters Elasticsearch refuses in index names
INVALID_INDEX_CHARS = set('\\/*?"<>| ,#:')


class Settings(BaseSettings):
    # Elasticsearch endpoints
    bulk_url: str = "http://localhost:9200/_bulk"
    node_info_url: str = "http://localhost:9200/"

    # Destination index
    index: str = "metrics"
    rolling_index: RollingIndexType = RollingIndexType.NONE

    # Reporting host, resolved once (defaults to socket.gethostname())
    host_name: Optional[str] = None

    # HTTP transport
    http_timeout_seconds: float = 10.0

    class Config:
        env_prefix = "METRICS_ES_"
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("rolling_index", mode="before")
    @classmethod
    def normalize_rolling_index(cls, v):
        """Accept "Daily", "DAILY", "daily"."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def validate_index_settings(self) -> list[str]:
        """Validate the destination index name. Returns list of issues."""
        issues = []

        if not self.index:
            issues.append("CRITICAL: index name is empty")
            return issues

        if self.index != self.index.lower():
            issues.append(f"ERROR: index name '{self.index}' must be lower case")

        if self.index[0] in "-_+":
            issues.append(f"ERROR: index name '{self.index}' cannot start with '-', '_' or '+'")

        bad = sorted(set(self.index) & INVALID_INDEX_CHARS)
        if bad:
            issues.append(f"ERROR: index name '{self.index}' contains invalid characters {bad}")

        if self.http_timeout_seconds <= 0:
            issues.append("WARNING: http_timeout_seconds should be positive")

        return issues


@lru_cache()
def get_settings() -> Settings:
    instance = Settings()

    issues = instance.validate_index_settings()
    for issue in issues:
        warnings.warn(issue, RuntimeWarning)

    return instance
