# pose_landmark_engine/landmark_engine/common/errors.py


class LandmarkPipelineError(Exception):
    """Base class for errors raised by the landmark pipeline."""


class InvalidRegionError(LandmarkPipelineError, ValueError):
    """Raised when a region of interest has non-positive extent."""


class InferenceError(LandmarkPipelineError, RuntimeError):
    """Raised when the inference engine fails for the current frame."""


class ShapeMismatchError(LandmarkPipelineError, ValueError):
    """Raised when a tensor does not match the layout of the configured mode.

    This points at a model/mode mismatch and is not recoverable per frame.
    """
