# pose_landmark_engine/landmark_engine/processing/landmark_pipeline.py
import logging
import time
from typing import Optional

import numpy as np

from ..common.config import LandmarkConfig
from ..common.enums import PoseState
from ..common.errors import InferenceError, ShapeMismatchError
from ..common.models import FrameMetadata, LandmarkResult, RegionOfInterest
from ..inference.adapter import InferenceAdapter
from .landmark_decoder import LandmarkDecoder
from .layout import layout_for
from .letterbox import remove_letterbox
from .partitioner import partition_landmarks
from .presence_gate import PresenceGate
from .projection import project_landmarks
from .tensor_preparer import TensorPreparer
from .tensor_splitter import TensorSplitter

logger = logging.getLogger(__name__)

class LandmarkPipeline:
    """Extracts pose landmarks from one ROI of one frame.

    Stages run strictly in order: prepare, infer, split, gate, decode, remove
    letterbox, project, partition. Mode-specific sizes are fixed at construction
    and no state survives a frame, so a single instance can serve concurrent
    callers as long as the adapter allows it.
    """

    def __init__(self, config: LandmarkConfig, adapter: InferenceAdapter):
        self.config = config
        self.adapter = adapter
        self.layout = layout_for(config.mode)

        self.preparer = TensorPreparer(config.tensor_size, channels_first=config.channels_first)
        self.splitter = TensorSplitter(self.layout)
        self.gate = PresenceGate(config.presence_threshold)
        self.decoder = LandmarkDecoder(self.layout.num_landmarks, config.tensor_size,
                                       self.layout.record_width)
        logger.info("Landmark pipeline ready (mode=%s, adapter=%s, threshold=%.2f)",
                    self.layout.mode.value, adapter.name(), config.presence_threshold)

    def process_frame(self, image: np.ndarray, roi: Optional[RegionOfInterest] = None,
                      metadata: Optional[FrameMetadata] = None) -> LandmarkResult:
        """Runs all stages for one frame; `roi=None` covers the whole image.

        Raises InvalidRegionError or InferenceError for this frame only.
        An absent pose is returned as a result with `landmarks=None`.
        """
        roi = roi or RegionOfInterest.full_image()
        start_time = time.perf_counter()
        metrics = {}

        tensor, padding = self.preparer.prepare(image, roi)
        stage_end = time.perf_counter()
        metrics["prepare_ms"] = (stage_end - start_time) * 1000

        output = self._run_inference(tensor)
        stage_start, stage_end = stage_end, time.perf_counter()
        metrics["inference_ms"] = (stage_end - stage_start) * 1000

        landmark_tensor, flag_tensor = self.splitter.split(output)
        presence_score, gated = self.gate.evaluate(flag_tensor, landmark_tensor)

        result = dict(
            presence_score=presence_score,
            roi=roi,
            padding=padding,
            frame_id=metadata.frame_id if metadata else None,
            timestamp=metadata.timestamp if metadata else None,
        )

        if gated is None:
            metrics["total_ms"] = (time.perf_counter() - start_time) * 1000
            logger.debug("Pose absent (presence=%.4f < %.2f)", presence_score, self.gate.threshold)
            return LandmarkResult(status=PoseState.ABSENT, processing_time_ms=metrics["total_ms"],
                                  performance_metrics=metrics, **result)

        stage_start = time.perf_counter()
        roi_local = self.decoder.decode(gated)
        content_local = remove_letterbox(roi_local, padding)
        projected = project_landmarks(content_local, roi)
        landmarks = partition_landmarks(projected, self.layout)
        stage_end = time.perf_counter()
        metrics["postprocess_ms"] = (stage_end - stage_start) * 1000
        metrics["total_ms"] = (stage_end - start_time) * 1000

        return LandmarkResult(status=PoseState.PRESENT, landmarks=landmarks,
                              processing_time_ms=metrics["total_ms"],
                              performance_metrics=metrics, **result)

    def _run_inference(self, tensor: np.ndarray) -> np.ndarray:
        try:
            return self.adapter.infer(tensor)
        except ShapeMismatchError:
            raise
        except InferenceError as e:
            logger.warning("Inference failed for frame: %s", e)
            raise
        except Exception as e:
            logger.warning("Inference failed for frame: %s", e)
            raise InferenceError(f"{self.adapter.name()} failed: {e}") from e

    def close(self):
        self.adapter.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
