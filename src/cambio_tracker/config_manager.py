"""
Reading and writing the tracker's configuration file.

The file format is chosen by suffix: ``.yaml``/``.yml``, ``.toml`` or
``.json``. A project directory holds the file under ``config/`` next to the
``data/`` and ``exports/`` directories it points at.
"""

import json
from pathlib import Path
from typing import IO, Any, Callable, Dict, Optional, Tuple

import toml
import yaml

from .config import AppConfig

PROJECT_SUBDIRS = ("config", "data", "exports")


def _write_yaml(data: Dict[str, Any], stream: IO[str]) -> None:
    yaml.safe_dump(data, stream, default_flow_style=False, sort_keys=False)


def _write_json(data: Dict[str, Any], stream: IO[str]) -> None:
    json.dump(data, stream, indent=2)


Reader = Callable[[IO[str]], Any]
Writer = Callable[[Dict[str, Any], IO[str]], Any]

FORMATS: Dict[str, Tuple[Reader, Writer]] = {
    '.yaml': (yaml.safe_load, _write_yaml),
    '.yml': (yaml.safe_load, _write_yaml),
    '.toml': (toml.load, toml.dump),
    '.json': (json.load, _write_json),
}


class ConfigManager:
    """One configuration file and the AppConfig last read from or written to it."""

    DEFAULT_CONFIG_NAME = "cambio_config.yaml"

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            config_path = Path("config") / self.DEFAULT_CONFIG_NAME
        self.config_path = Path(config_path)
        self.config: Optional[AppConfig] = None

    def _format(self) -> Tuple[Reader, Writer]:
        suffix = self.config_path.suffix.lower()
        if suffix not in FORMATS:
            raise ValueError(f"Unsupported config format: {suffix or self.config_path.name}")
        return FORMATS[suffix]

    def load(self) -> AppConfig:
        """
        Read the configuration file.

        Keys missing from the file take their defaults, so an empty YAML file
        loads as the default configuration.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the suffix is unsupported or a value is invalid
        """
        if not self.config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        read, _ = self._format()
        with self.config_path.open(encoding='utf-8') as f:
            data = read(f)

        self.config = AppConfig(**(data or {}))
        return self.config

    def save(self, config: Optional[AppConfig] = None) -> None:
        """Write ``config`` (or the one last loaded) to the configuration file."""
        config = config if config is not None else self.config
        if config is None:
            raise ValueError("No configuration to save")

        _, write = self._format()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        # json mode turns paths into plain strings every format can hold
        with self.config_path.open('w', encoding='utf-8') as f:
            write(config.model_dump(mode='json'), f)

        self.config = config

    def create_default(self, project_dir: Optional[Path] = None) -> AppConfig:
        """
        Start from the default configuration.

        With ``project_dir``, the data file and export directory are placed
        under it; otherwise they stay relative to the working directory.
        Nothing is written to disk.
        """
        config = AppConfig()
        if project_dir is not None:
            root = Path(project_dir)
            config.data_file = root / config.data_file
            config.export_directory = root / config.export_directory

        self.config = config
        return config

    @classmethod
    def initialize_project(cls, project_dir: Path) -> 'ConfigManager':
        """Lay out a project directory and write its default configuration."""
        root = Path(project_dir)
        for name in PROJECT_SUBDIRS:
            (root / name).mkdir(parents=True, exist_ok=True)

        manager = cls(root / "config" / cls.DEFAULT_CONFIG_NAME)
        manager.save(manager.create_default(root))
        return manager
