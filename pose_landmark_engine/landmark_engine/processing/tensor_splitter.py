# pose_landmark_engine/landmark_engine/processing/tensor_splitter.py
from typing import Tuple

import numpy as np

from ..common.errors import ShapeMismatchError
from .layout import ModeLayout

class TensorSplitter:
    """Slices a raw model output into the landmark payload and the presence flag."""

    def __init__(self, layout: ModeLayout):
        self.layout = layout

    def split(self, output: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        flat = np.asarray(output).reshape(-1)
        if flat.size != self.layout.output_size:
            raise ShapeMismatchError(
                f"{self.layout.mode.value} expects {self.layout.output_size} output values, got {flat.size}"
            )
        boundary = self.layout.landmark_payload_size
        return flat[:boundary].copy(), flat[boundary:].copy()
