# pose_landmark_engine/landmark_engine/common/config.py
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field

from .enums import LandmarkMode, LogLevel

class CameraConfig(BaseModel):
    """Frame source settings; `source` is a device index or a video path/URL."""
    source: Union[int, str] = 0
    resolution: Tuple[int, int] = (1280, 720)
    target_fps: int = Field(30, gt=0)
    buffer_size: int = Field(5, gt=0)

class LandmarkConfig(BaseModel):
    """Construction-time settings of a landmark pipeline instance."""
    mode: LandmarkMode = LandmarkMode.FULL_BODY
    presence_threshold: float = Field(0.5, ge=0.0, le=1.0)
    tensor_size: int = Field(256, gt=0)
    channels_first: bool = False
    model_path: Optional[str] = None
    landmark_output: int = Field(0, ge=0)
    presence_output: int = Field(1, ge=0)
    device: str = "cpu"

class TrackingConfig(BaseModel):
    roi_scale: float = Field(1.25, gt=0.0)

class VisualizationConfig(BaseModel):
    draw_landmarks: bool = True
    draw_auxiliary: bool = True
    draw_roi: bool = True
    draw_hud: bool = True
    min_visibility: float = Field(0.5, ge=0.0, le=1.0)

class LoggingConfig(BaseModel):
    level: LogLevel = LogLevel.INFO
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class EngineConfig(BaseModel):
    """Top-level application configuration, one model per YAML section."""
    camera: CameraConfig = Field(default_factory=CameraConfig)
    landmarks: LandmarkConfig = Field(default_factory=LandmarkConfig)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
    visualization: VisualizationConfig = Field(default_factory=VisualizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

def load_config(path: Union[str, Path]) -> EngineConfig:
    """Reads and validates a YAML configuration file.

    Raises FileNotFoundError, yaml.YAMLError or pydantic.ValidationError.
    """
    with open(path, "r") as f:
        raw = yaml.safe_load(f)
    return EngineConfig.model_validate(raw or {})

def configure_logging(config: LoggingConfig) -> None:
    logging.basicConfig(level=getattr(logging, config.level.value), format=config.format)
