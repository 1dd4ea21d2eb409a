"""Configuration of the quadrature rules with parsing from TOML.

Example for TOML section:
    [quadrature]
    default_type = "gauss_legendre"
    jacobi_n_highest_order = 61
    log_level = "WARNING"

"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import refquad

logger = logging.getLogger(__name__)


def _get_section(data: dict, section: str) -> dict:
    """Utility to get a section from a toml-loaded dictionary."""
    try:
        return data[section]
    except KeyError:
        raise KeyError(f"Section {section} not found.")


def _get_key(section: dict, key: str, default=None, required=True, type_=None) -> Any:
    """Utility to get a key from a section with type conversion and default value."""
    if required and key not in section:
        raise KeyError(f"Missing key '{key}' in section {section}.")

    if key in section:
        value = section[key]
        return type_(value) if type_ else value
    else:
        return default


@dataclass
class QuadratureConfig:
    """Configuration of :class:`refquad.QuadratureRules`."""

    default_type: str = "gauss_legendre"
    """Family used when no family is requested explicitly."""
    jacobi_n_highest_order: int = 61
    """Highest order of the Gauss-Jacobi-n family."""
    log_level: str = "WARNING"
    """Level of the refquad logger."""

    def __post_init__(self) -> None:
        self.check()

    def check(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: if the default family or the log level is not known, or the
                highest order is negative.

        """
        refquad.QuadratureType.from_string(self.default_type)
        if self.jacobi_n_highest_order < 0:
            raise ValueError(
                f"Highest order {self.jacobi_n_highest_order} is negative."
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown logging level {self.log_level}.")

    def load(self, path: Path) -> "QuadratureConfig":
        """Read the [quadrature] section of a TOML file and apply the log level.

        Missing keys keep their current values.

        Args:
            path (Path): path to the TOML file.

        Returns:
            QuadratureConfig: self.

        """
        data = tomllib.loads(Path(path).read_text())
        sec = _get_section(data, "quadrature")
        self.default_type = _get_key(
            sec, "default_type", default=self.default_type, required=False, type_=str
        )
        self.jacobi_n_highest_order = _get_key(
            sec,
            "jacobi_n_highest_order",
            default=self.jacobi_n_highest_order,
            required=False,
            type_=int,
        )
        self.log_level = _get_key(
            sec, "log_level", default=self.log_level, required=False, type_=str
        )
        self.check()
        refquad.set_log_level(self.log_level)
        logger.info(f"Loaded quadrature configuration from {path}.")
        return self
