"""
Configuration files and validated fluid parameters

INI files are read with configparser; files ending in ``.yaml``/``.yml`` are
read with PyYAML and must map section names to key/value mappings. Either way
values are looked up by ``(section, key)`` and converted on access.
"""

import configparser
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..geometry.bounding_box import BoundingBox

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = ('.yaml', '.yml')
_BOOLEAN_STATES = configparser.ConfigParser.BOOLEAN_STATES


class Config:
    """
    Read-only key/value configuration loaded from an INI or YAML file
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        Args:
            file_path: Path to the configuration file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a YAML file does not hold a mapping of sections
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"Invalid config file supplied: {file_path}")

        self._file_path = str(file_path)
        if path.suffix.lower() in _YAML_SUFFIXES:
            self._sections = self._load_yaml(path)
        else:
            self._sections = self._load_ini(path)

        logger.debug("Loaded config %s (%d sections)", self._file_path, len(self._sections))

    @staticmethod
    def _load_ini(path: Path) -> Dict[str, Dict[str, Any]]:
        # Keys keep their case; configparser lowercases them by default
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str
        parser.read(path, encoding='utf-8')
        return {name: dict(parser[name]) for name in parser.sections()}

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Dict[str, Any]]:
        raw = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
        if not isinstance(raw, dict) or not all(isinstance(v, dict) for v in raw.values()):
            raise ValueError(f"{path}: expected a mapping of sections to key/value mappings")
        return {str(name): dict(values) for name, values in raw.items()}

    @property
    def file_path(self) -> str:
        return self._file_path

    def get_file_path(self) -> str:
        return self._file_path

    def sections(self):
        return list(self._sections)

    def has(self, section: str, key: str) -> bool:
        return key in self._sections.get(section, {})

    def _get(self, section: str, key: str) -> Any:
        try:
            return self._sections[section][key]
        except KeyError:
            raise KeyError(f"No such key: '{section}/{key}'") from None

    def get_int(self, section: str, key: str) -> int:
        value = self._get(section, key)
        if isinstance(value, bool):
            raise ValueError(f"'{section}/{key}': expected an integer, got {value!r}")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise ValueError(f"'{section}/{key}': could not convert {value!r} to int") from None

    def get_double(self, section: str, key: str) -> float:
        value = self._get(section, key)
        if isinstance(value, bool):
            raise ValueError(f"'{section}/{key}': expected a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValueError(f"'{section}/{key}': could not convert {value!r} to float") from None

    def get_string(self, section: str, key: str) -> str:
        return str(self._get(section, key))

    def get_bool(self, section: str, key: str) -> bool:
        value = self._get(section, key)
        if isinstance(value, bool):
            return value
        state = _BOOLEAN_STATES.get(str(value).strip().lower())
        if state is None:
            raise ValueError(f"'{section}/{key}': could not convert {value!r} to bool")
        return state

    def __repr__(self):
        return f"Config({self._file_path!r})"


@dataclass(frozen=True)
class FluidParameters:
    """
    Physical parameters for a single sphere in a box of fluid
    """
    sphere_radius: float = 1.0
    viscosity: float = 1.0
    shear_rate: float = 0.0
    box_x: float = 100.0
    box_y: float = 100.0
    box_z: float = 100.0

    def __post_init__(self):
        if self.sphere_radius < 0:
            raise ValueError(f"sphere_radius must be non-negative, got {self.sphere_radius}")
        if self.viscosity <= 0:
            raise ValueError(f"viscosity must be positive, got {self.viscosity}")
        for name in ('box_x', 'box_y', 'box_z'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @classmethod
    def from_config(cls, config: Config, section: str = "fluid") -> 'FluidParameters':
        """
        Read parameters from ``section``; keys that are absent keep their defaults
        """
        values = {}
        for name in ('sphere_radius', 'viscosity', 'shear_rate', 'box_x', 'box_y', 'box_z'):
            if config.has(section, name):
                values[name] = config.get_double(section, name)
        return cls(**values)

    def bounding_box(self) -> BoundingBox:
        """Box of the configured size centred on the origin"""
        return BoundingBox.from_dimensions(self.box_x, self.box_y, self.box_z)
