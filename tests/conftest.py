"""Shared fixtures for landmark engine tests.

All model outputs are synthetic; no inference runtime is needed.
"""

import numpy as np
import pytest

from landmark_engine.common.config import LandmarkConfig
from landmark_engine.common.enums import LandmarkMode
from landmark_engine.inference.adapter import FunctionInferenceAdapter
from landmark_engine.processing.landmark_pipeline import LandmarkPipeline
from landmark_engine.processing.layout import layout_for


@pytest.fixture
def make_model_output():
    """Factory for flat model outputs from normalized records.

    `points` is an (L, 3) array of ROI-tensor-normalized x, y, z; they are
    scaled to tensor pixels the way a landmark model emits them.
    """
    def _make(points, presence_logit=10.0, visibility_logit=10.0,
              landmark_presence_logit=10.0, tensor_size=256):
        points = np.asarray(points, dtype=np.float64)
        records = np.empty((points.shape[0], 5), dtype=np.float64)
        records[:, :3] = points * tensor_size
        records[:, 3] = visibility_logit
        records[:, 4] = landmark_presence_logit
        return np.concatenate([records.reshape(-1), [presence_logit]]).astype(np.float32)
    return _make


@pytest.fixture
def grid_points():
    """Deterministic, distinct landmark positions inside the unit square."""
    def _make(num_landmarks):
        rng = np.random.default_rng(7)
        points = rng.uniform(0.1, 0.9, size=(num_landmarks, 3))
        points[:, 2] = rng.uniform(-0.2, 0.2, size=num_landmarks)
        return points
    return _make


@pytest.fixture
def make_pipeline():
    """Builds a pipeline whose adapter always returns the given output."""
    def _make(output, mode=LandmarkMode.FULL_BODY, **config):
        adapter = FunctionInferenceAdapter(lambda tensor: output, name="static")
        return LandmarkPipeline(LandmarkConfig(mode=mode, **config), adapter)
    return _make


@pytest.fixture
def full_body_layout():
    return layout_for(LandmarkMode.FULL_BODY)


@pytest.fixture
def upper_body_layout():
    return layout_for(LandmarkMode.UPPER_BODY)
