"""
GRAPHGEN CONFIG - Generation and Validation Settings

Tuning knobs (density percentages, attempt budgets, exact-search size
limits, tolerances) live in config/graphgen.toml. The file is read once,
converted into a frozen GenerationSettings struct and cached.

Missing keys fall back to the struct defaults; a missing or unparsable file
falls back to the defaults entirely (with a warning).

Usage:
    from infrastructure.config_graph import get_settings

    settings = get_settings()
    settings.generation.density_percentages.sparse   # 0.15

    # In tests
    set_settings(GenerationSettings(...))
    reset_settings()
"""
import msgspec
from typing import Optional, Dict, Any, Tuple
from pathlib import Path
import warnings

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "graphgen.toml"


# =============================================================================
# SETTINGS SCHEMA
# =============================================================================

class DensityPercentages(msgspec.Struct, kw_only=True, frozen=True):
    """Fraction of the maximum possible edges targeted per density tier."""
    sparse: float = 0.15
    moderate: float = 0.4
    dense: float = 0.7
    unconstrained: float = 0.4

    def for_tier(self, tier: str) -> float:
        return getattr(self, tier)


class GenerationSection(msgspec.Struct, kw_only=True, frozen=True):
    density_percentages: DensityPercentages = msgspec.field(default_factory=DensityPercentages)
    attempt_multiplier: int = 10
    dense_attempt_multiplier: int = 100
    self_loop_attempt_interval: int = 10
    default_weight_range: Tuple[int, int] = (1, 100)
    default_edge_types: Tuple[str, ...] = ("type_a", "type_b", "type_c")


class ValidationSection(msgspec.Struct, kw_only=True, frozen=True):
    # Density buckets (edge ratio upper bounds)
    sparse_ratio_max: float = 0.2
    moderate_ratio_max: float = 0.45

    # Exact combinatorial search limits (vertex counts)
    split_exact_max_nodes: int = 10
    chordal_exact_max_nodes: int = 10
    comparability_exact_max_nodes: int = 10
    independence_exact_max_nodes: int = 20
    domination_exact_max_nodes: int = 15
    coloring_exact_max_nodes: int = 12
    connectivity_exact_max_nodes: int = 12
    hereditary_exact_max_nodes: int = 20
    cycle_search_max_nodes: int = 10

    # Network statistics
    scale_free_min_nodes: int = 10
    power_law_min_nodes: int = 50

    # Numeric tolerances
    spectral_tolerance: float = 0.1
    approximation_tolerance: float = 0.5
    power_iteration_max_iterations: int = 100
    power_iteration_tolerance: float = 1e-6


class LoggingSection(msgspec.Struct, kw_only=True, frozen=True):
    level: str = "WARNING"
    event_buffer_size: int = 10000


class GenerationSettings(msgspec.Struct, kw_only=True, frozen=True):
    generation: GenerationSection = msgspec.field(default_factory=GenerationSection)
    validation: ValidationSection = msgspec.field(default_factory=ValidationSection)
    logging: LoggingSection = msgspec.field(default_factory=LoggingSection)


# =============================================================================
# LOADING
# =============================================================================

def load_toml_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from graphgen.toml.

    Args:
        path: Alternate TOML file (defaults to config/graphgen.toml)

    Returns:
        Dict with all configuration sections, or {} if the file can't be read
    """
    try:
        import tomllib
        config_path = path or DEFAULT_CONFIG_PATH

        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        warnings.warn(f"Failed to load config from TOML: {e}")
        return {}


def settings_from_dict(config_dict: Dict[str, Any]) -> GenerationSettings:
    """
    Convert raw TOML sections into GenerationSettings.

    Unknown sections are ignored; malformed values fall back to defaults.
    """
    known = {k: v for k, v in config_dict.items() if k in GenerationSettings.__struct_fields__}
    try:
        return msgspec.convert(known, GenerationSettings)
    except msgspec.ValidationError as e:
        warnings.warn(f"Invalid graphgen config, using defaults: {e}")
        return GenerationSettings()


def load_settings(path: Optional[Path] = None) -> GenerationSettings:
    return settings_from_dict(load_toml_config(path))


# =============================================================================
# CACHED ACCESS
# =============================================================================

_settings: Optional[GenerationSettings] = None


def get_settings() -> GenerationSettings:
    """Get the cached settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def set_settings(settings: GenerationSettings) -> None:
    """Replace the cached settings (used by tests and embedding callers)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Drop the cache so the next get_settings() re-reads the TOML file."""
    global _settings
    _settings = None
