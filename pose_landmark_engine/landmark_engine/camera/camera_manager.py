# pose_landmark_engine/landmark_engine/camera/camera_manager.py
import cv2
import time
import logging
import threading
import numpy as np
from collections import deque
from typing import Tuple, Optional
from ..common.config import CameraConfig
from ..common.models import FrameMetadata

logger = logging.getLogger(__name__)

class CameraManager:
    """Grabs frames on a background thread and hands out the most recent one.

    Device sources keep retrying failed grabs; file sources stop at end of stream.
    """

    def __init__(self, config: CameraConfig):
        self.config = config
        source = config.source
        if isinstance(source, str) and source.isdigit():
            source = int(source)
        self._source = source
        self._is_file = isinstance(source, str)
        self._cap = cv2.VideoCapture(self._source)
        if not self._cap.isOpened():
            raise IOError(f"Cannot open camera source: {self._source}")

        if not self._is_file:
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.resolution[0])
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.resolution[1])
            self._cap.set(cv2.CAP_PROP_FPS, config.target_fps)

        self._buffer = deque(maxlen=config.buffer_size)
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._update, daemon=True)
        self._running = False
        self._frame_id = 0
        self._dropped_frames = 0

    def _update(self):
        """Frame-grabbing loop; the deque's maxlen drops the oldest frames."""
        while self._running:
            if not self._cap.grab():
                if self._is_file:
                    logger.info("End of stream reached for %s", self._source)
                    self._running = False
                    break
                self._dropped_frames += 1
                time.sleep(0.01)
                continue

            ret, frame = self._cap.retrieve()
            if not ret:
                self._dropped_frames += 1
                continue

            timestamp = time.perf_counter()
            with self._lock:
                self._frame_id += 1
                self._buffer.append((frame, self._frame_id, timestamp))
            if self._is_file:
                # Pace file playback so the latest-frame reader does not skip everything.
                time.sleep(1.0 / self.config.target_fps)

    def get_frame(self) -> Tuple[Optional[np.ndarray], Optional[FrameMetadata]]:
        """Returns the latest frame and its metadata, or (None, None) when nothing is buffered."""
        with self._lock:
            if not self._buffer:
                return None, None
            frame, frame_id, timestamp = self._buffer[-1]

        metadata = FrameMetadata(
            frame_id=frame_id,
            timestamp=timestamp,
            source_resolution=(frame.shape[1], frame.shape[0])
        )
        return frame.copy(), metadata

    def get_stats(self) -> dict:
        return {
            "is_running": self.is_running(),
            "buffer_size": len(self._buffer),
            "frames_captured": self._frame_id,
            "dropped_frames": self._dropped_frames,
            "target_fps": self.config.target_fps,
            "actual_resolution": (self._cap.get(cv2.CAP_PROP_FRAME_WIDTH), self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        }

    def is_running(self) -> bool:
        return self._running

    def __enter__(self):
        self._running = True
        self._thread.start()
        logger.info("CameraManager started on source %s", self._source)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._running = False
        self._thread.join()
        self._cap.release()
        logger.info("CameraManager stopped after %d frames (%d dropped)", self._frame_id, self._dropped_frames)
