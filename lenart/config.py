"""Конфигурация: палитра, толщины кисти и параметры выполнения.

Значения по умолчанию повторяют стандартный набор инструментов LenART.
YAML-файл может переопределить любое поле; неизвестные ключи игнорируются.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from lenart.models.geometry import Color

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LENART_CONFIG"


@dataclass
class LenartConfig:
    """Набор инструментов и настройки выполнения."""

    palette: List[str] = field(default_factory=lambda: [
        "#E91E63",  # pink
        "#FFC107",  # amber
        "#4CAF50",  # green
        "#2196F3",  # blue
        "#FF5722",  # deep orange
    ])
    thickness_options: List[float] = field(default_factory=lambda: [4.0, 8.0, 14.0])
    default_thickness_index: int = 1
    base_color: str = "#FFFFFF"

    # Default name offered by the save dialog (strftime pattern)
    file_name_pattern: str = "LenART_%Y%m%d_%H%M%S.png"

    worker_threads: int = 1
    poll_interval_ms: int = 30
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.palette:
            raise ValueError("palette must contain at least one colour")
        for value in self.palette:
            Color.from_hex(value)
        Color.from_hex(self.base_color)
        if not self.thickness_options or any(t <= 0 for t in self.thickness_options):
            raise ValueError(f"thickness_options must be positive: {self.thickness_options}")
        if not 0 <= self.default_thickness_index < len(self.thickness_options):
            raise ValueError(f"default_thickness_index out of range: {self.default_thickness_index}")
        if self.worker_threads < 1:
            raise ValueError(f"worker_threads must be >= 1: {self.worker_threads}")
        if self.poll_interval_ms < 1:
            raise ValueError(f"poll_interval_ms must be >= 1: {self.poll_interval_ms}")

    @property
    def palette_colors(self) -> List[Color]:
        return [Color.from_hex(value) for value in self.palette]

    @property
    def base(self) -> Color:
        return Color.from_hex(self.base_color)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LenartConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: Optional[Union[str, Path]] = None) -> LenartConfig:
    """Читает конфиг из `path` или `$LENART_CONFIG`; иначе значения по умолчанию."""
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return LenartConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.warning("Config file %s not found, using defaults", config_path)
        return LenartConfig()

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return LenartConfig.from_dict(data)
