# pose_landmark_engine/landmark_engine/common/enums.py
from enum import Enum

class PoseState(str, Enum):
    """Outcome of a single frame's landmark pass."""
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"

class LandmarkMode(str, Enum):
    """Landmark topology served by a pipeline instance."""
    FULL_BODY = "FULL_BODY"
    UPPER_BODY = "UPPER_BODY"

class LogLevel(str, Enum):
    """Defines logging levels for structured logging."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
