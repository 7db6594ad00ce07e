# pose_landmark_engine/landmark_engine/processing/presence_gate.py
from typing import Optional, Tuple

import numpy as np

from ..common.errors import ShapeMismatchError

def sigmoid(x):
    """Logistic activation written via tanh so large logits cannot overflow."""
    return 0.5 * (1.0 + np.tanh(0.5 * np.asarray(x, dtype=np.float64)))

class PresenceGate:
    """Turns the presence flag into a score and suppresses the landmarks below threshold."""

    def __init__(self, threshold: float = 0.5):
        self.threshold = threshold

    def score(self, flag_tensor: np.ndarray) -> float:
        flag = np.asarray(flag_tensor).reshape(-1)
        if flag.size != 1:
            raise ShapeMismatchError(f"presence flag must hold one value, got {flag.size}")
        return float(sigmoid(flag[0]))

    def evaluate(self, flag_tensor: np.ndarray,
                 landmark_tensor: np.ndarray) -> Tuple[float, Optional[np.ndarray]]:
        """Returns the presence score and the landmark tensor, or None when absent."""
        presence = self.score(flag_tensor)
        # NaN scores fail this comparison and gate out.
        if not presence >= self.threshold:
            return presence, None
        return presence, landmark_tensor
