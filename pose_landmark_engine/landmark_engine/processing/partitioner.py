# pose_landmark_engine/landmark_engine/processing/partitioner.py
from ..common.errors import ShapeMismatchError
from ..common.models import LandmarkList, PoseLandmarks
from .layout import ModeLayout

def partition_landmarks(landmarks: LandmarkList, layout: ModeLayout) -> PoseLandmarks:
    """Splits the projected list into primary [0, P) and auxiliary [P, L) landmarks."""
    if len(landmarks) != layout.num_landmarks:
        raise ShapeMismatchError(
            f"{layout.mode.value} expects {layout.num_landmarks} landmarks, got {len(landmarks)}"
        )
    return PoseLandmarks(
        primary=landmarks.slice(0, layout.num_primary),
        auxiliary=landmarks.slice(layout.num_primary, layout.num_landmarks),
    )
