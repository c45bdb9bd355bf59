"""Configuration management for the in-memory cache package."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from evictcache.in_memory_cache.eviction_policy.eviction_policy import EvictionPolicy


class Settings(BaseSettings):
    """Cache settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_prefix="EVICTCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from environment variables
    )
    
    # Shared cache defaults
    default_eviction_policy: EvictionPolicy = Field(
        default=EvictionPolicy.LRU,
        description="Eviction policy used by the shared in-memory cache (LRU or LFU)"
    )
    default_capacity: int = Field(
        default=1000,
        ge=0,
        description="Maximum number of keys held by the shared in-memory cache"
    )
    
    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=True, description="Render log events as JSON")
    
    # Monitoring
    enable_metrics: bool = Field(default=True, description="Enable Prometheus metrics")
    
    @field_validator("default_eviction_policy", mode="before")
    @classmethod
    def normalize_eviction_policy(cls, value):
        """Accept policy names in any case, e.g. "lfu"."""
        if isinstance(value, str):
            return value.strip().upper()
        return value


# Global settings instance
settings = Settings()
