# pose_landmark_engine/landmark_engine/common/models.py
import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, Tuple, Dict, List
from .enums import PoseState

LANDMARK_FIELDS = ("x", "y", "z", "visibility", "presence")

class FrameMetadata(BaseModel):
    """Metadata associated with a single camera frame."""
    frame_id: int
    timestamp: float
    source_resolution: Tuple[int, int]

class RegionOfInterest(BaseModel):
    """Oriented rectangle in image-normalized coordinates; rotation in radians.

    Extent is deliberately not validated here: a non-positive width or height is
    a per-frame failure reported by the tensor preparer.
    """
    center_x: float
    center_y: float
    width: float
    height: float
    rotation: float = 0.0

    @classmethod
    def full_image(cls) -> "RegionOfInterest":
        return cls(center_x=0.5, center_y=0.5, width=1.0, height=1.0, rotation=0.0)

class LetterboxPadding(BaseModel):
    """Fraction of the prepared tensor's extent that is padding on each side."""
    left: float = Field(0.0, ge=0.0, lt=1.0)
    top: float = Field(0.0, ge=0.0, lt=1.0)
    right: float = Field(0.0, ge=0.0, lt=1.0)
    bottom: float = Field(0.0, ge=0.0, lt=1.0)

    @model_validator(mode="after")
    def _check_content_remains(self):
        if self.left + self.right >= 1.0 or self.top + self.bottom >= 1.0:
            raise ValueError("padding leaves no room for image content")
        return self

    @property
    def horizontal_scale(self) -> float:
        return 1.0 - self.left - self.right

    @property
    def vertical_scale(self) -> float:
        return 1.0 - self.top - self.bottom

class Landmark(BaseModel):
    x: float
    y: float
    z: float
    visibility: float
    presence: float

class LandmarkList(BaseModel):
    """Ordered landmarks stored row-wise as (x, y, z, visibility, presence).

    Row order is the anatomical index and is never changed by any stage.
    """
    values: np.ndarray

    class Config:
        arbitrary_types_allowed = True

    @field_validator("values", mode="before")
    @classmethod
    def _as_records(cls, value):
        arr = np.asarray(value, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != len(LANDMARK_FIELDS):
            raise ValueError(f"expected an (N, {len(LANDMARK_FIELDS)}) array, got shape {arr.shape}")
        return arr

    def __len__(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, index: int) -> Landmark:
        return Landmark(**dict(zip(LANDMARK_FIELDS, (float(v) for v in self.values[index]))))

    @property
    def x(self) -> np.ndarray:
        return self.values[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.values[:, 1]

    @property
    def z(self) -> np.ndarray:
        return self.values[:, 2]

    @property
    def visibility(self) -> np.ndarray:
        return self.values[:, 3]

    @property
    def presence(self) -> np.ndarray:
        return self.values[:, 4]

    def slice(self, start: int, stop: int) -> "LandmarkList":
        return LandmarkList(values=self.values[start:stop].copy())

    def to_landmarks(self) -> List[Landmark]:
        return [self[i] for i in range(len(self))]

class PoseLandmarks(BaseModel):
    """Primary landmarks plus the auxiliary pair used for ROI tracking."""
    primary: LandmarkList
    auxiliary: LandmarkList

class LandmarkResult(BaseModel):
    """Encapsulates the complete result of a single frame's landmark pass.

    `landmarks` is None exactly when the pose was gated out as absent; that is
    a completed frame, not a failure.
    """
    status: PoseState
    presence_score: float
    roi: RegionOfInterest
    padding: LetterboxPadding
    landmarks: Optional[PoseLandmarks] = None
    frame_id: Optional[int] = None
    timestamp: Optional[float] = None
    processing_time_ms: float = 0.0
    performance_metrics: Dict[str, float] = Field(default_factory=dict)

    @property
    def is_present(self) -> bool:
        return self.landmarks is not None
