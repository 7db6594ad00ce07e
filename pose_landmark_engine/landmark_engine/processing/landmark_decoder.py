# pose_landmark_engine/landmark_engine/processing/landmark_decoder.py
import numpy as np

from ..common.errors import ShapeMismatchError
from ..common.models import LandmarkList
from .presence_gate import sigmoid

class LandmarkDecoder:
    """Decodes flat landmark records into ROI-local normalized landmarks.

    Each record is (x, y, z, visibility logit, presence logit) with x, y and z in
    tensor pixels. Coordinates are divided by the tensor size and both logits go
    through a sigmoid. Record order is preserved.
    """

    def __init__(self, num_landmarks: int, tensor_size: int = 256, record_width: int = 5):
        if record_width < 5:
            raise ValueError(f"records need at least 5 values, got {record_width}")
        self.num_landmarks = num_landmarks
        self.tensor_size = tensor_size
        self.record_width = record_width

    def decode(self, tensor: np.ndarray) -> LandmarkList:
        flat = np.asarray(tensor, dtype=np.float64).reshape(-1)
        expected = self.num_landmarks * self.record_width
        if flat.size != expected:
            raise ShapeMismatchError(f"expected {expected} landmark values, got {flat.size}")
        records = flat.reshape(self.num_landmarks, self.record_width)

        values = np.empty((self.num_landmarks, 5), dtype=np.float64)
        values[:, :3] = records[:, :3] / float(self.tensor_size)
        values[:, 3] = sigmoid(records[:, 3])
        values[:, 4] = sigmoid(records[:, 4])
        return LandmarkList(values=values)
