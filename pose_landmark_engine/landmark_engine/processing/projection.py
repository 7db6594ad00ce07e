# pose_landmark_engine/landmark_engine/processing/projection.py
"""ROI-local <-> full-image coordinate mapping.

A point (u, v) in ROI-local normalized space is recentred to [-0.5, 0.5],
rotated by the ROI rotation, scaled by the ROI extent and translated to the
ROI centre. The tensor preparer builds its crop from this same forward map,
so projection undoes preparation exactly.
"""
import math
from typing import Tuple

import numpy as np

from ..common.models import LandmarkList, RegionOfInterest

def project_points(roi: RegionOfInterest, xs, ys) -> Tuple[np.ndarray, np.ndarray]:
    """Maps ROI-local normalized points into full-image normalized points."""
    x = np.asarray(xs, dtype=np.float64) - 0.5
    y = np.asarray(ys, dtype=np.float64) - 0.5
    cos_r, sin_r = math.cos(roi.rotation), math.sin(roi.rotation)
    out_x = (cos_r * x - sin_r * y) * roi.width + roi.center_x
    out_y = (sin_r * x + cos_r * y) * roi.height + roi.center_y
    return out_x, out_y

def unproject_points(roi: RegionOfInterest, xs, ys) -> Tuple[np.ndarray, np.ndarray]:
    """Inverse of project_points: full-image normalized to ROI-local normalized."""
    x = (np.asarray(xs, dtype=np.float64) - roi.center_x) / roi.width
    y = (np.asarray(ys, dtype=np.float64) - roi.center_y) / roi.height
    cos_r, sin_r = math.cos(roi.rotation), math.sin(roi.rotation)
    return cos_r * x + sin_r * y + 0.5, -sin_r * x + cos_r * y + 0.5

def project_landmarks(landmarks: LandmarkList, roi: RegionOfInterest) -> LandmarkList:
    """Re-expresses ROI-local landmarks in full-image normalized coordinates.

    Depth follows the x scaling (ROI width); visibility and presence pass through.
    """
    values = landmarks.values.copy()
    values[:, 0], values[:, 1] = project_points(roi, landmarks.x, landmarks.y)
    values[:, 2] = landmarks.z * roi.width
    return LandmarkList(values=values)
