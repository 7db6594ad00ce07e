# pose_landmark_engine/landmark_engine/visualization/visualizer.py
import cv2
import numpy as np
import mediapipe as mp
from mediapipe.framework.formats import landmark_pb2
from ..common.config import VisualizationConfig
from ..common.models import LandmarkList, LandmarkResult, RegionOfInterest
from ..processing.projection import project_points

class Visualizer:
    """Draws landmarks, the tracked ROI and a HUD over camera frames."""

    def __init__(self, config: VisualizationConfig):
        self.config = config
        self.mp_drawing = mp.solutions.drawing_utils
        self.mp_pose = mp.solutions.pose
        self.font = cv2.FONT_HERSHEY_SIMPLEX

    def render(self, frame: np.ndarray, result: LandmarkResult, current_fps: float) -> np.ndarray:
        """Returns a copy of the frame with the result drawn on it."""
        output_frame = frame.copy()

        if self.config.draw_roi:
            self._draw_roi(output_frame, result.roi)

        if result.landmarks is not None:
            if self.config.draw_landmarks:
                primary = result.landmarks.primary
                self.mp_drawing.draw_landmarks(
                    image=output_frame,
                    landmark_list=self._landmarks_to_proto(primary),
                    connections=self._connections_for(len(primary)),
                    landmark_drawing_spec=self.mp_drawing.DrawingSpec(color=(0, 255, 0), thickness=2, circle_radius=2),
                    connection_drawing_spec=self.mp_drawing.DrawingSpec(color=(200, 200, 200), thickness=2, circle_radius=2),
                )
            if self.config.draw_auxiliary:
                self._draw_auxiliary(output_frame, result.landmarks.auxiliary)

        if self.config.draw_hud:
            self._draw_hud(output_frame, result, current_fps)

        return output_frame

    def _connections_for(self, num_primary: int):
        """Skeleton edges restricted to landmarks present in the current mode."""
        return frozenset(
            (a, b) for a, b in self.mp_pose.POSE_CONNECTIONS if a < num_primary and b < num_primary
        )

    def _draw_roi(self, frame: np.ndarray, roi: RegionOfInterest):
        h, w = frame.shape[:2]
        xs, ys = project_points(roi, (0.0, 1.0, 1.0, 0.0), (0.0, 0.0, 1.0, 1.0))
        corners = np.stack([xs * w, ys * h], axis=1).round().astype(np.int32)
        cv2.polylines(frame, [corners], isClosed=True, color=(255, 160, 0), thickness=2)

    def _draw_auxiliary(self, frame: np.ndarray, auxiliary: LandmarkList):
        h, w = frame.shape[:2]
        for x, y in zip(auxiliary.x, auxiliary.y):
            cv2.circle(frame, (int(round(x * w)), int(round(y * h))), 4, (0, 0, 255), -1)

    def _draw_hud(self, frame: np.ndarray, result: LandmarkResult, fps: float):
        hud_elements = [
            f"FPS: {fps:.1f}",
            f"Processing: {result.processing_time_ms:.1f} ms",
            f"State: {result.status.value}",
            f"Presence: {result.presence_score:.3f}",
        ]
        for i, text in enumerate(hud_elements):
            cv2.putText(frame, text, (10, 30 + i * 30), self.font, 0.7, (240, 240, 240), 2, cv2.LINE_AA)

    def _landmarks_to_proto(self, landmarks: LandmarkList):
        """Converts landmarks to MediaPipe's NormalizedLandmarkList for drawing.

        Landmarks under `min_visibility` get visibility 0 so the drawing utilities
        skip them while the landmark count stays intact.
        """
        landmark_list = landmark_pb2.NormalizedLandmarkList()
        for x, y, z, visibility, presence in landmarks.values:
            lm = landmark_list.landmark.add()
            lm.x = float(x)
            lm.y = float(y)
            lm.z = float(z)
            lm.visibility = float(visibility) if visibility >= self.config.min_visibility else 0.0
            lm.presence = float(presence)
        return landmark_list
