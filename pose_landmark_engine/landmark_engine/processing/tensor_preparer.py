# pose_landmark_engine/landmark_engine/processing/tensor_preparer.py
import logging
from typing import Tuple

import cv2
import numpy as np

from ..common.errors import InvalidRegionError
from ..common.models import LetterboxPadding, RegionOfInterest
from .letterbox import apply_letterbox
from .projection import project_points

logger = logging.getLogger(__name__)

def compute_letterbox_padding(roi: RegionOfInterest, image_width: int, image_height: int) -> LetterboxPadding:
    """Padding needed to fit the ROI's pixel extent into a square without distortion."""
    roi_width_px = roi.width * image_width
    roi_height_px = roi.height * image_height
    if roi_height_px > roi_width_px:
        pad = 0.5 * (1.0 - roi_width_px / roi_height_px)
        return LetterboxPadding(left=pad, right=pad)
    pad = 0.5 * (1.0 - roi_height_px / roi_width_px)
    return LetterboxPadding(top=pad, bottom=pad)

class TensorPreparer:
    """Crops an oriented ROI out of an image into a fixed-size letterboxed tensor."""

    def __init__(self, tensor_size: int = 256, channels_first: bool = False,
                 value_range: Tuple[float, float] = (0.0, 1.0)):
        self.tensor_size = tensor_size
        self.channels_first = channels_first
        self.value_range = value_range

    def prepare(self, image: np.ndarray, roi: RegionOfInterest) -> Tuple[np.ndarray, LetterboxPadding]:
        """Returns the (S, S, C) float32 tensor, or (C, S, S) when channels_first, and its padding."""
        if not (roi.width > 0 and roi.height > 0):
            raise InvalidRegionError(f"ROI must have positive extent, got {roi.width}x{roi.height}")

        if image.ndim == 2:
            image = image[:, :, np.newaxis]
        height, width = image.shape[:2]
        size = self.tensor_size
        padding = compute_letterbox_padding(roi, width, height)

        # Top-left, top-right and bottom-left ROI corners in both frames.
        # The -0.5 converts continuous coordinates to OpenCV pixel centres.
        corners_u, corners_v = (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)
        src_x, src_y = project_points(roi, corners_u, corners_v)
        dst_x, dst_y = apply_letterbox(padding, corners_u, corners_v)
        src = np.float32(np.stack([src_x * width, src_y * height], axis=1) - 0.5)
        dst = np.float32(np.stack([dst_x * size, dst_y * size], axis=1) - 0.5)
        matrix = cv2.getAffineTransform(src, dst)

        warped = cv2.warpAffine(image.astype(np.float32), matrix, (size, size),
                                flags=cv2.INTER_LINEAR, borderMode=cv2.BORDER_REPLICATE)
        if warped.ndim == 2:
            warped = warped[:, :, np.newaxis]

        low, high = self.value_range
        scale = float(np.iinfo(image.dtype).max) if np.issubdtype(image.dtype, np.integer) else 1.0
        tensor = low + (high - low) * (warped / scale)
        self._fill_padding(tensor, padding, low)

        tensor = tensor.astype(np.float32)
        if self.channels_first:
            tensor = np.ascontiguousarray(tensor.transpose(2, 0, 1))
        return tensor, padding

    def _fill_padding(self, tensor: np.ndarray, padding: LetterboxPadding, value: float) -> None:
        size = self.tensor_size
        left = int(round(padding.left * size))
        right = int(round(padding.right * size))
        top = int(round(padding.top * size))
        bottom = int(round(padding.bottom * size))
        tensor[:, :left] = value
        tensor[:, size - right:] = value
        tensor[:top, :] = value
        tensor[size - bottom:, :] = value
