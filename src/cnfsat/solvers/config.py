"""
Settings shared by the solvers, the instance generator and the CLI.

Values live in an OmegaConf tree seeded with :attr:`SolverConfig.DEFAULT_CONFIG`
and addressed with dotted keys such as ``"solver.timeout"``.
"""

import logging
import os
from typing import Any

import omegaconf
from omegaconf import DictConfig, OmegaConf

# Set up logging
logger = logging.getLogger(__name__)


class SolverConfig:
    """
    Layered settings: built-in defaults, then an optional YAML/JSON file,
    then programmatic overrides.
    """

    DEFAULT_CONFIG = {
        "solver": {
            "name": "dpll",
            "timeout": None,
            "trace": False,
            "trace_dir": "./traces",
        },
        "problem": {
            "num_vars": 20,
            "num_clauses": 85,
            "k": 3,
            "seed": 42,
        },
        "sudoku": {
            "block_size": 3,
        },
        "logging": {
            "level": "WARNING",
            "file": None,
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }

    def __init__(self, config_path: str | None = None):
        """
        Args:
            config_path: Optional settings file merged over the defaults
        """
        self.config: DictConfig = OmegaConf.create(self.DEFAULT_CONFIG)
        if config_path:
            self._merge_file(config_path)

    def _merge_file(self, config_path: str) -> None:
        """
        Raises:
            FileNotFoundError: If ``config_path`` does not exist
        """
        if not os.path.exists(config_path):
            logger.error(f"Config file {config_path} does not exist")
            raise FileNotFoundError(f"Config file {config_path} does not exist")

        overrides = OmegaConf.load(config_path)
        self.config = OmegaConf.merge(self.config, overrides)
        logger.debug(f"Merged settings from {config_path}")

    def update(self, overrides: dict[str, Any]) -> None:
        """Merge a nested dictionary of settings."""
        self.config = OmegaConf.merge(self.config, overrides)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key.

        Args:
            key: Dotted path, e.g. ``"problem.k"``
            default: Returned when the key is missing or null

        Returns:
            The stored value or ``default``
        """
        try:
            value = OmegaConf.select(self.config, key, default=default)
        except omegaconf.errors.OmegaConfBaseException:
            return default
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under a dotted key, creating missing sections."""
        OmegaConf.update(self.config, key, value, force_add=True)

    def to_dict(self) -> dict[str, Any]:
        return OmegaConf.to_container(self.config, resolve=True)

    def save(self, file_path: str) -> None:
        """Write the settings as YAML, creating parent directories."""
        os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
        OmegaConf.save(self.config, file_path)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


# Process-wide settings
config = SolverConfig()


def load_config(config_path: str | None = None) -> SolverConfig:
    """
    Replace the process-wide settings with those read from ``config_path``.

    Without a path the current settings are returned unchanged.
    """
    global config
    if config_path:
        config = SolverConfig(config_path)
    return config


def get_config() -> SolverConfig:
    return config
