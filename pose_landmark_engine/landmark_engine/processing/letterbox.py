# pose_landmark_engine/landmark_engine/processing/letterbox.py
from typing import Tuple

import numpy as np

from ..common.models import LandmarkList, LetterboxPadding

def apply_letterbox(padding: LetterboxPadding, xs, ys) -> Tuple[np.ndarray, np.ndarray]:
    """Maps ROI-content normalized points to where they sit in the padded tensor."""
    x = np.asarray(xs, dtype=np.float64) * padding.horizontal_scale + padding.left
    y = np.asarray(ys, dtype=np.float64) * padding.vertical_scale + padding.top
    return x, y

def remove_letterbox(landmarks: LandmarkList, padding: LetterboxPadding) -> LandmarkList:
    """Undoes the aspect-preserving padding added during tensor preparation.

    z is divided by the horizontal scale, the same factor applied to x.
    Results are not clamped: landmarks past the ROI content fall outside [0, 1].
    """
    values = landmarks.values.copy()
    values[:, 0] = (landmarks.x - padding.left) / padding.horizontal_scale
    values[:, 1] = (landmarks.y - padding.top) / padding.vertical_scale
    values[:, 2] = landmarks.z / padding.horizontal_scale
    return LandmarkList(values=values)
