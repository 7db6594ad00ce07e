import math

import numpy as np
import pytest

from landmark_engine.common.models import LandmarkList, RegionOfInterest
from landmark_engine.processing.projection import project_landmarks, project_points, unproject_points


def _landmarks(rows):
    return LandmarkList(values=np.asarray(rows, dtype=np.float64))


def test_full_image_roi_is_identity():
    rows = [[0.1, 0.9, 0.2, 0.5, 0.6], [0.7, 0.3, -0.4, 0.1, 0.2], [-0.2, 1.3, 0.0, 1.0, 1.0]]
    projected = project_landmarks(_landmarks(rows), RegionOfInterest.full_image())
    np.testing.assert_allclose(projected.values, rows, atol=1e-12)


@pytest.mark.parametrize("rotation", [0.0, 0.3, -1.2, math.pi / 2, math.pi, 5.0])
def test_roi_centre_maps_to_roi_centre_for_any_rotation(rotation):
    roi = RegionOfInterest(center_x=0.3, center_y=0.6, width=0.4, height=0.2, rotation=rotation)
    x, y = project_points(roi, [0.5], [0.5])
    assert x[0] == pytest.approx(0.3)
    assert y[0] == pytest.approx(0.6)


def test_quarter_turn_rotation():
    roi = RegionOfInterest(center_x=0.5, center_y=0.5, width=0.5, height=0.5, rotation=math.pi / 2)
    x, y = project_points(roi, [1.0], [0.5])
    assert x[0] == pytest.approx(0.5)
    assert y[0] == pytest.approx(0.75)


def test_scale_and_translation_without_rotation():
    roi = RegionOfInterest(center_x=0.25, center_y=0.75, width=0.5, height=0.25)
    projected = project_landmarks(_landmarks([[0.0, 0.0, 0.2, 0.3, 0.4],
                                              [1.0, 1.0, -0.2, 0.3, 0.4]]), roi)
    np.testing.assert_allclose(projected.x, [0.0, 0.5])
    np.testing.assert_allclose(projected.y, [0.625, 0.875])
    np.testing.assert_allclose(projected.z, [0.1, -0.1])
    np.testing.assert_allclose(projected.visibility, [0.3, 0.3])
    np.testing.assert_allclose(projected.presence, [0.4, 0.4])


def test_depth_is_not_rotated_or_translated():
    roi = RegionOfInterest(center_x=0.9, center_y=0.1, width=0.3, height=0.6, rotation=2.0)
    projected = project_landmarks(_landmarks([[0.2, 0.8, 0.5, 1.0, 1.0]]), roi)
    assert projected.z[0] == pytest.approx(0.15)


def test_unproject_inverts_project():
    roi = RegionOfInterest(center_x=0.45, center_y=0.55, width=0.35, height=0.7, rotation=-0.8)
    xs = np.array([0.0, 0.25, 1.0, 1.3])
    ys = np.array([0.0, 0.75, 1.0, -0.1])
    local_x, local_y = unproject_points(roi, *project_points(roi, xs, ys))
    np.testing.assert_allclose(local_x, xs, atol=1e-12)
    np.testing.assert_allclose(local_y, ys, atol=1e-12)


def test_landmark_order_is_preserved():
    rows = np.zeros((35, 5))
    rows[:, 0] = np.linspace(0.0, 1.0, 35)
    roi = RegionOfInterest(center_x=0.5, center_y=0.5, width=0.5, height=0.5)
    projected = project_landmarks(_landmarks(rows), roi)
    assert np.all(np.diff(projected.x) > 0)
