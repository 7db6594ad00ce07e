import numpy as np
import pytest

mp = pytest.importorskip("mediapipe")
if not hasattr(mp, "solutions"):
    pytest.skip("mediapipe build without solutions drawing utilities", allow_module_level=True)

from landmark_engine.common.config import VisualizationConfig  # noqa: E402
from landmark_engine.common.enums import PoseState  # noqa: E402
from landmark_engine.common.models import (  # noqa: E402
    LandmarkList,
    LandmarkResult,
    LetterboxPadding,
    PoseLandmarks,
    RegionOfInterest,
)
from landmark_engine.visualization.visualizer import Visualizer  # noqa: E402


def _result(present=True, num_primary=33):
    landmarks = None
    if present:
        primary = np.zeros((num_primary, 5))
        primary[:, 0] = np.linspace(0.2, 0.8, num_primary)
        primary[:, 1] = 0.5
        primary[:, 3:] = 0.9
        auxiliary = np.array([[0.5, 0.6, 0.0, 0.9, 0.9], [0.5, 0.3, 0.0, 0.9, 0.9]])
        landmarks = PoseLandmarks(primary=LandmarkList(values=primary), auxiliary=LandmarkList(values=auxiliary))
    return LandmarkResult(
        status=PoseState.PRESENT if present else PoseState.ABSENT,
        presence_score=0.95 if present else 0.05,
        roi=RegionOfInterest(center_x=0.5, center_y=0.5, width=0.6, height=0.6),
        padding=LetterboxPadding(),
        landmarks=landmarks,
    )


def test_render_draws_on_a_copy():
    frame = np.zeros((120, 160, 3), dtype=np.uint8)
    output = Visualizer(VisualizationConfig()).render(frame, _result(), current_fps=30.0)

    assert output.shape == frame.shape
    assert output.any()
    assert not frame.any()


def test_absent_pose_without_overlays_leaves_frame_untouched():
    frame = np.zeros((120, 160, 3), dtype=np.uint8)
    config = VisualizationConfig(draw_roi=False, draw_hud=False)
    output = Visualizer(config).render(frame, _result(present=False), current_fps=30.0)
    np.testing.assert_array_equal(output, frame)


def test_upper_body_connections_stay_within_primary_set():
    connections = Visualizer(VisualizationConfig())._connections_for(25)
    assert connections
    assert all(a < 25 and b < 25 for a, b in connections)


def test_low_visibility_landmarks_are_hidden():
    visualizer = Visualizer(VisualizationConfig(min_visibility=0.5))
    landmarks = LandmarkList(values=[[0.1, 0.1, 0.0, 0.2, 1.0], [0.2, 0.2, 0.0, 0.8, 1.0]])
    proto = visualizer._landmarks_to_proto(landmarks)
    assert proto.landmark[0].visibility == 0.0
    assert proto.landmark[1].visibility == pytest.approx(0.8)
