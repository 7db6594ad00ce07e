# pose_landmark_engine/landmark_engine/inference/adapter.py
"""Inference engine boundary.

The pipeline only needs `infer(tensor) -> flat output` with the layout of its
mode: landmark records first, presence flag last. Any failure surfaces as
InferenceError and only affects the current frame.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional, Union

import numpy as np

from ..common.errors import InferenceError, ShapeMismatchError
from ..processing.layout import ModeLayout

logger = logging.getLogger(__name__)


class InferenceAdapter(ABC):
    """Model adapter interface: prepared tensor in, flat output tensor out."""

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def infer(self, tensor: np.ndarray) -> np.ndarray: ...

    def close(self) -> None:
        pass


class FunctionInferenceAdapter(InferenceAdapter):
    """Wraps a plain callable, e.g. another runtime's invoke function."""

    def __init__(self, fn: Callable[[np.ndarray], np.ndarray], name: str = "function"):
        self._fn = fn
        self._name = name

    def name(self) -> str:
        return self._name

    def infer(self, tensor: np.ndarray) -> np.ndarray:
        try:
            return np.asarray(self._fn(tensor))
        except (InferenceError, ShapeMismatchError):
            raise
        except Exception as e:
            raise InferenceError(f"{self._name} inference failed: {e}") from e


class OnnxLandmarkModel(InferenceAdapter):
    """Pose landmark model served by ONNX Runtime.

    Landmark models often emit more records than a mode consumes (e.g. 39
    records where full body reads 35); only the leading
    `layout.landmark_payload_size` values of the landmark output are kept.

    Args:
        model_path: Path to the .onnx file.
        layout: Tensor layout of the pipeline's mode.
        landmark_output: Index of the output holding landmark records.
        presence_output: Index of the output holding the presence logit.
        device: "cpu" or a CUDA device string.
    """

    def __init__(
        self,
        model_path: Union[str, Path],
        layout: ModeLayout,
        landmark_output: int = 0,
        presence_output: int = 1,
        device: str = "cpu",
    ):
        self._model_path = Path(model_path)
        self._layout = layout
        self._landmark_output = landmark_output
        self._presence_output = presence_output
        self._device = device
        self._session: Optional[object] = None
        self._input_name: Optional[str] = None

    def name(self) -> str:
        return f"onnx:{self._model_path.name}"

    def initialize(self) -> None:
        if self._session is not None:
            return

        import onnxruntime as ort

        if not self._model_path.exists():
            raise FileNotFoundError(f"Landmark model not found at {self._model_path}")

        providers = ["CUDAExecutionProvider", "CPUExecutionProvider"]
        if "cpu" in self._device.lower():
            providers = ["CPUExecutionProvider"]
        available = set(ort.get_available_providers())
        providers = [p for p in providers if p in available] or ["CPUExecutionProvider"]

        self._session = ort.InferenceSession(str(self._model_path), providers=providers)
        self._input_name = self._session.get_inputs()[0].name
        logger.info("Landmark model %s initialized (providers=%s)", self._model_path, providers)

    def infer(self, tensor: np.ndarray) -> np.ndarray:
        self.initialize()
        batch = np.asarray(tensor, dtype=np.float32)[np.newaxis]
        try:
            outputs = self._session.run(None, {self._input_name: batch})
        except Exception as e:
            raise InferenceError(f"ONNX Runtime failed on {self._model_path.name}: {e}") from e
        return self._assemble(outputs)

    def _assemble(self, outputs) -> np.ndarray:
        payload = self._layout.landmark_payload_size
        try:
            landmarks = np.asarray(outputs[self._landmark_output], dtype=np.float32).reshape(-1)
            presence = np.asarray(outputs[self._presence_output], dtype=np.float32).reshape(-1)
        except IndexError as e:
            raise ShapeMismatchError(f"model produced {len(outputs)} outputs: {e}") from e
        if landmarks.size < payload or presence.size < self._layout.presence_size:
            raise ShapeMismatchError(
                f"model outputs too small for {self._layout.mode.value}: "
                f"{landmarks.size} landmark values, {presence.size} presence values"
            )
        return np.concatenate([landmarks[:payload], presence[:self._layout.presence_size]])

    def close(self) -> None:
        self._session = None
