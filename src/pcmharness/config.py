"""
Configuration management for the partial-curve-matching harness.

Defaults encode the fixed run configuration; a YAML file may override any
value section by section.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


DISCOVER = "discover"
REPLAY = "replay"


@dataclass
class RunConfig:
    """Which cases to run and how many."""
    mode: str = DISCOVER  # "discover" or "replay"
    run_count: int = 10


@dataclass
class GeneratorConfig:
    """Configuration for fresh Discover cases."""
    point_count: int = 5
    field_size: float = 2.0
    secondary: str = "identical"  # "identical", "translate", "perturb" or "random"
    translation: list = field(default_factory=lambda: [3.0, 1.0])
    deviation: float = 1.0
    secondary_point_count: int = 3
    seed: int = None


@dataclass
class CheckConfig:
    """Match threshold and comparison tolerance."""
    epsilon: float = 1.0
    tolerance: float = 1e-8


@dataclass
class CorpusConfig:
    """Location of the regression corpus."""
    directory: str = "testdata"


@dataclass
class RenderConfig:
    """Configuration for diagnostic PNG rendering."""
    enabled: bool = False
    out_dir: str = "renders"
    cell_size: int = 20
    margin: int = 20
    curve_canvas: int = 400


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class HarnessConfig:
    """Complete harness configuration."""
    run: RunConfig = field(default_factory=RunConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    engine: str = None


SECTIONS = ("run", "generator", "check", "corpus", "render", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = HarnessConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    _check_config(config)
    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in SECTIONS:
        values = yaml_data.get(section) or {}
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    if "engine" in yaml_data:
        config.engine = yaml_data["engine"]

    return config


def _check_config(config):
    """Reject values the harness cannot run with."""
    if config.run.mode not in (DISCOVER, REPLAY):
        raise ValueError(f"Unknown run mode: {config.run.mode!r}")
    if config.run.run_count < 0:
        raise ValueError("run_count must be >= 0")
    if config.generator.secondary not in ("identical", "translate", "perturb", "random"):
        raise ValueError(f"Unknown secondary curve mode: {config.generator.secondary!r}")
    if config.check.epsilon <= 0:
        raise ValueError("epsilon must be positive")


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(HarnessConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
