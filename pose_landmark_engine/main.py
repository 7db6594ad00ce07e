# pose_landmark_engine/main.py
import os
import cv2
import time
import yaml
import logging
import numpy as np
from collections import deque
from pydantic import ValidationError

from landmark_engine.camera.camera_manager import CameraManager
from landmark_engine.common.config import configure_logging, load_config
from landmark_engine.common.errors import InferenceError, InvalidRegionError
from landmark_engine.inference.adapter import OnnxLandmarkModel
from landmark_engine.processing.landmark_pipeline import LandmarkPipeline
from landmark_engine.processing.layout import layout_for
from landmark_engine.tracking.roi_tracker import RoiTracker
from landmark_engine.visualization.visualizer import Visualizer

logger = logging.getLogger("pose_landmark_engine")

def main():
    """
    Demo tracking loop: camera frames go through the landmark pipeline, the
    auxiliary landmarks steer the next ROI, and the overlay is displayed.
    """
    script_dir = os.path.dirname(os.path.abspath(__file__))
    config_path = os.environ.get("POSE_LANDMARK_CONFIG", os.path.join(script_dir, 'config.yaml'))

    try:
        config = load_config(config_path)
    except (IOError, yaml.YAMLError, ValidationError) as e:
        print(f"ERROR: Failed to load configuration '{config_path}'. {e}")
        return

    configure_logging(config.logging)
    if not config.landmarks.model_path:
        logger.error("landmarks.model_path is not set in %s", config_path)
        return

    fps_history = deque(maxlen=100)
    pipeline = None
    try:
        with CameraManager(config.camera) as camera:
            adapter = OnnxLandmarkModel(
                config.landmarks.model_path,
                layout_for(config.landmarks.mode),
                landmark_output=config.landmarks.landmark_output,
                presence_output=config.landmarks.presence_output,
                device=config.landmarks.device,
            )
            pipeline = LandmarkPipeline(config.landmarks, adapter)
            visualizer = Visualizer(config.visualization)
            tracker = None

            while camera.is_running():
                frame_start_time = time.perf_counter()

                frame, metadata = camera.get_frame()
                if frame is None:
                    time.sleep(0.001)
                    continue
                if tracker is None:
                    tracker = RoiTracker(metadata.source_resolution, config.tracking.roi_scale)

                # --- Core Processing Pipeline ---
                rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
                try:
                    result = pipeline.process_frame(rgb, tracker.roi, metadata)
                except (InvalidRegionError, InferenceError) as e:
                    logger.warning("Frame %d skipped: %s", metadata.frame_id, e)
                    tracker.reset()
                    continue
                tracker.update(result)

                # --- FPS Calculation ---
                latency = time.perf_counter() - frame_start_time
                fps_history.append(1.0 / latency if latency > 0 else 0)
                avg_fps = np.mean(fps_history)

                # --- Visualization ---
                output_frame = visualizer.render(frame, result, avg_fps)
                cv2.imshow('Pose Landmark Engine', output_frame)

                if cv2.waitKey(1) & 0xFF == ord('q'):
                    logger.info("Shutdown signal received.")
                    break

    except IOError as e:
        logger.error("Failed to initialize. %s", e)
    except Exception:
        logger.exception("An unexpected critical error occurred")
    finally:
        if pipeline is not None:
            pipeline.close()
        cv2.destroyAllWindows()
        logger.info("Application terminated.")

if __name__ == "__main__":
    main()
