"""Slideshow definitions loaded from the user's YAML config file.

Expected format::

    slideshows:
      - path: ~/slideshows/family.sls
        width: 1920
        height: 1080
        min_aspect_ratio: 1.0
        max_aspect_ratio: 2.0
        min_creation_date: 2019-01-01
        max_creation_date: 2020-12-31
        image_dirs:
          - ~/Pictures/2019
          - ~/Pictures/2020
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from config import APP_NAME, CONFIG_FILENAME
from errors import ConfigError
from photo import ImageMetadata

logger = logging.getLogger(__name__)


class SlideshowConfig(BaseModel):
    """One playlist to build and the filters that select its images.

    Both ranges are inclusive.
    """

    path: Path
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    min_aspect_ratio: float = Field(gt=0)
    max_aspect_ratio: float = Field(gt=0)
    min_creation_date: date
    max_creation_date: date
    image_dirs: list[Path] = Field(default_factory=list)

    @field_validator("path", "image_dirs", mode="after")
    @classmethod
    def _expand_user(cls, v):
        if isinstance(v, list):
            return [p.expanduser() for p in v]
        return v.expanduser()

    @model_validator(mode="after")
    def _check_ranges(self) -> SlideshowConfig:
        if self.min_aspect_ratio > self.max_aspect_ratio:
            raise ValueError(
                f"min_aspect_ratio {self.min_aspect_ratio} is greater than "
                f"max_aspect_ratio {self.max_aspect_ratio}"
            )
        if self.min_creation_date > self.max_creation_date:
            raise ValueError(
                f"min_creation_date {self.min_creation_date} is after "
                f"max_creation_date {self.max_creation_date}"
            )
        return self

    def accepts(self, metadata: ImageMetadata) -> bool:
        """Check if an image falls within the date and aspect ratio ranges."""
        if not self.min_creation_date <= metadata.creation_date <= self.max_creation_date:
            return False
        return self.min_aspect_ratio <= metadata.aspect_ratio <= self.max_aspect_ratio


class Config(BaseModel):
    """Top-level config: the slideshows to build."""

    slideshows: list[SlideshowConfig] = Field(default_factory=list)


def get_config_path() -> Path:
    return Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config(path: Path | None = None) -> Config:
    """Load and validate the slideshow config.

    Args:
        path: Explicit config file. When None, the platform config location
            is used and a missing file yields an empty config.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails validation,
            or if an explicit path does not exist.
    """
    explicit = path is not None
    if path is None:
        path = get_config_path()

    if not path.exists():
        if explicit:
            raise ConfigError(path, "file not found")
        logger.warning("No config file at %s, nothing to build", path)
        return Config()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(path, str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(path, f"invalid YAML: {exc}") from exc

    try:
        return Config.model_validate(data or {})
    except ValidationError as exc:
        raise ConfigError(path, str(exc)) from exc
