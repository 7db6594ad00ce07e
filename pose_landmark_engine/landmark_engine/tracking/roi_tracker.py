# pose_landmark_engine/landmark_engine/tracking/roi_tracker.py
"""Derives the next frame's ROI from the auxiliary landmark pair.

The first auxiliary landmark is the body centre, the second a point whose
offset from the centre gives the body's scale and orientation.
"""
import logging
import math
from typing import Tuple

from ..common.models import LandmarkList, LandmarkResult, RegionOfInterest

logger = logging.getLogger(__name__)

TARGET_ANGLE = math.pi / 2

def normalize_radians(angle: float) -> float:
    """Wraps an angle into [-pi, pi)."""
    return angle - 2 * math.pi * math.floor((angle + math.pi) / (2 * math.pi))

def roi_from_auxiliary(auxiliary: LandmarkList, image_size: Tuple[int, int],
                       scale: float = 1.25) -> RegionOfInterest:
    """Builds a square (in pixels) ROI centred on the body centre landmark."""
    width, height = image_size
    center_x, center_y = float(auxiliary.x[0]), float(auxiliary.y[0])
    dx = (float(auxiliary.x[1]) - center_x) * width
    dy = (float(auxiliary.y[1]) - center_y) * height

    side = 2.0 * math.hypot(dx, dy) * scale
    rotation = normalize_radians(TARGET_ANGLE - math.atan2(-dy, dx))
    return RegionOfInterest(
        center_x=center_x,
        center_y=center_y,
        width=side / width,
        height=side / height,
        rotation=rotation,
    )

class RoiTracker:
    """Carries the ROI from one frame to the next; restarts on the full image when the pose is lost."""

    def __init__(self, image_size: Tuple[int, int], scale: float = 1.25):
        self.image_size = image_size
        self.scale = scale
        self.roi = RegionOfInterest.full_image()

    def update(self, result: LandmarkResult) -> RegionOfInterest:
        if result.landmarks is None:
            if self.roi != RegionOfInterest.full_image():
                logger.info("Pose lost, searching the full image")
            self.reset()
            return self.roi

        candidate = roi_from_auxiliary(result.landmarks.auxiliary, self.image_size, self.scale)
        if candidate.width > 0 and candidate.height > 0:
            self.roi = candidate
        else:
            # Coincident auxiliary points give no usable extent.
            self.reset()
        return self.roi

    def reset(self) -> None:
        self.roi = RegionOfInterest.full_image()
