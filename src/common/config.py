"""Configuration for the breaking-news pipeline.

Values come from ``configs/<name>.yaml`` and may be overridden per key by
environment variables (a ``.env`` file is honoured). Stage functions take
plain parameters or the section dataclasses below; only the CLI loads config.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

import yaml
from dotenv import load_dotenv

from ingest_headlines.sources import WORLD_FEEDS

load_dotenv()

T = TypeVar("T")

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "configs"


@dataclass
class FeedsConfig:
    world_sources: list[str] = field(default_factory=lambda: list(WORLD_FEEDS))
    request_timeout: int = 30
    max_workers: int = 8
    mock: bool = False


@dataclass
class EmbeddingConfig:
    provider: str = "openai"  # "openai", "sentence-transformers" or "none"
    model: str = "text-embedding-3-small"


@dataclass
class ClusteringConfig:
    kind: str = "world"
    similarity_threshold: float = 0.8
    min_magnitude: float = 4.5


@dataclass
class ScoringConfig:
    recency_window_hours: float = 48.0
    recency_floor: float = 0.2
    recency_ceiling: float = 1.0
    unknown_recency: float = 0.5


@dataclass
class TitleConfig:
    max_words: int = 8
    min_phrase_words: int = 3


@dataclass
class DedupeConfig:
    jaccard_threshold: float = 0.3
    centroid_threshold: float = 0.85


@dataclass
class BreakingRules:
    min_items: int = 3
    min_sources: int = 2
    recency_boost: float = 0.9


@dataclass
class GateConfig:
    change_threshold: float = 0.3


@dataclass
class OutputConfig:
    snapshot_path: str = "state/last_reacted.json"
    local_dir: str = "output"
    max_retained_clusters: int = 20


@dataclass
class NewsConfig:
    feeds: FeedsConfig = field(default_factory=FeedsConfig)
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    titles: TitleConfig = field(default_factory=TitleConfig)
    dedupe: DedupeConfig = field(default_factory=DedupeConfig)
    breaking: BreakingRules = field(default_factory=BreakingRules)
    gate: GateConfig = field(default_factory=GateConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


# env var -> (section, key, parser)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "CLUSTER_SIMILARITY_THRESHOLD": ("clustering", "similarity_threshold", float),
    "MIN_MAGNITUDE": ("clustering", "min_magnitude", float),
    "RECENCY_WINDOW_HOURS": ("scoring", "recency_window_hours", float),
    "BREAKING_MIN_ITEMS": ("breaking", "min_items", int),
    "BREAKING_MIN_SOURCES": ("breaking", "min_sources", int),
    "BREAKING_RECENCY_BOOST": ("breaking", "recency_boost", float),
    "DEDUPE_JACCARD_THRESHOLD": ("dedupe", "jaccard_threshold", float),
    "DEDUPE_CENTROID_THRESHOLD": ("dedupe", "centroid_threshold", float),
    "HEADLINE_CHANGE_THRESHOLD": ("gate", "change_threshold", float),
    "EMBEDDING_PROVIDER": ("embedding", "provider", str),
    "EMBEDDING_MODEL": ("embedding", "model", str),
    "NEWS_SOURCES_WORLD": ("feeds", "world_sources", lambda v: _parse_csv(v)),
    "MOCK_NEWS": ("feeds", "mock", lambda v: v.strip().lower() == "true"),
    "SNAPSHOT_PATH": ("output", "snapshot_path", str),
    "MAX_RETAINED_CLUSTERS": ("output", "max_retained_clusters", int),
}


def _parse_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = "CONFIG_ENV",
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml) or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _build_section(cls: type[T], data: dict[str, Any] | None) -> T:
    data = data or {}
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**data)


def config_from_dict(data: dict[str, Any]) -> NewsConfig:
    """Build a NewsConfig from a nested dict (as loaded from YAML)."""
    sections = {f.name: f for f in fields(NewsConfig)}
    unknown = set(data) - set(sections)
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")

    kwargs = {}
    for name, section in sections.items():
        section_cls = section.default_factory  # type: ignore[misc]
        kwargs[name] = _build_section(section_cls, data.get(name))
    return NewsConfig(**kwargs)


def apply_env_overrides(config: NewsConfig, environ: dict[str, str] | None = None) -> NewsConfig:
    """Overwrite config values from environment variables, in place."""
    environ = os.environ if environ is None else environ
    for env_name, (section, key, parse) in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        setattr(getattr(config, section), key, parse(raw))
    return config


def load_config(config_name: str | None = None, config_dir: Path = CONFIG_DIR) -> NewsConfig:
    """Load configuration from YAML file, then apply environment overrides.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses CONFIG_ENV env var or "prod".
        config_dir: Directory holding the YAML files.

    Returns:
        Loaded NewsConfig object
    """
    config_path = find_config_path(config_name, config_dir)
    config = config_from_dict(load_yaml(config_path))
    return apply_env_overrides(config)


class ConfigSingleton(Generic[T]):
    """Generic config singleton manager.

    Provides get/set/reset pattern for managing a global config instance.
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        """Get the config, loading it lazily if needed."""
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        """Set the config directly."""
        self._config = config

    def reset(self) -> None:
        """Reset the config, forcing reload on next get()."""
        self._config = None


_manager: ConfigSingleton[NewsConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
