import math

import numpy as np
import pytest

from landmark_engine.common.enums import PoseState
from landmark_engine.common.models import (
    LandmarkList,
    LandmarkResult,
    LetterboxPadding,
    PoseLandmarks,
    RegionOfInterest,
)
from landmark_engine.tracking.roi_tracker import RoiTracker, normalize_radians, roi_from_auxiliary


def _auxiliary(center, scale_point):
    values = np.zeros((2, 5))
    values[0, :2] = center
    values[1, :2] = scale_point
    return LandmarkList(values=values)


def _result(auxiliary=None):
    landmarks = None
    if auxiliary is not None:
        landmarks = PoseLandmarks(primary=LandmarkList(values=np.zeros((33, 5))), auxiliary=auxiliary)
    return LandmarkResult(
        status=PoseState.PRESENT if landmarks else PoseState.ABSENT,
        presence_score=0.9 if landmarks else 0.1,
        roi=RegionOfInterest.full_image(),
        padding=LetterboxPadding(),
        landmarks=landmarks,
    )


def test_upright_body_gives_unrotated_square_roi():
    roi = roi_from_auxiliary(_auxiliary((0.5, 0.5), (0.5, 0.25)), (100, 100))
    assert roi.center_x == pytest.approx(0.5)
    assert roi.center_y == pytest.approx(0.5)
    assert roi.width == pytest.approx(0.625)
    assert roi.height == pytest.approx(0.625)
    assert roi.rotation == pytest.approx(0.0)


def test_body_lying_to_the_right_is_a_quarter_turn():
    roi = roi_from_auxiliary(_auxiliary((0.5, 0.5), (0.75, 0.5)), (100, 100), scale=1.0)
    assert roi.rotation == pytest.approx(math.pi / 2)
    assert roi.width == pytest.approx(0.5)


def test_roi_is_square_in_pixels_on_wide_images():
    roi = roi_from_auxiliary(_auxiliary((0.5, 0.5), (0.5, 0.25)), (200, 100))
    assert roi.width * 200 == pytest.approx(roi.height * 100)
    assert roi.height == pytest.approx(0.625)


def test_normalize_radians():
    assert normalize_radians(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
    assert normalize_radians(-3 * math.pi / 2) == pytest.approx(math.pi / 2)
    assert normalize_radians(0.5) == pytest.approx(0.5)


def test_tracker_follows_present_pose_and_resets_when_absent():
    tracker = RoiTracker((100, 100))
    assert tracker.roi == RegionOfInterest.full_image()

    roi = tracker.update(_result(_auxiliary((0.3, 0.6), (0.3, 0.4))))
    assert roi.center_x == pytest.approx(0.3)
    assert tracker.roi == roi

    assert tracker.update(_result()) == RegionOfInterest.full_image()


def test_tracker_ignores_degenerate_auxiliary_pair():
    tracker = RoiTracker((100, 100))
    roi = tracker.update(_result(_auxiliary((0.3, 0.6), (0.3, 0.6))))
    assert roi == RegionOfInterest.full_image()
