from dataclasses import dataclass
import os
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class RingConfig:
    """
    Configuration object for building and persisting hash rings.

    Attributes:
        replicas: Virtual nodes generated per physical node.
        max_length: Upper bound on node identifier and key length.
        redis_url: Redis connection string used by RingStore.
        key_prefix: Namespace for snapshot keys in Redis.
        log_level: Level applied to loggers created by Logger.
        log_dir: Directory for the log file; console only when unset.
    """

    replicas: int = 150
    max_length: int = 1000
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "hashorbit"
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "RingConfig":
        defaults = cls()
        return cls(
            replicas=_env_int("HASHORBIT_REPLICAS", defaults.replicas),
            max_length=_env_int("HASHORBIT_MAX_LENGTH", defaults.max_length),
            redis_url=os.getenv("HASHORBIT_REDIS_URL", defaults.redis_url),
            key_prefix=os.getenv("HASHORBIT_KEY_PREFIX", defaults.key_prefix),
            log_level=os.getenv("HASHORBIT_LOG_LEVEL", defaults.log_level).upper(),
            log_dir=os.getenv("HASHORBIT_LOG_DIR") or defaults.log_dir,
        )
