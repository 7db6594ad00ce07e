# pose_landmark_engine/landmark_engine/processing/layout.py
from dataclasses import dataclass
from typing import Dict

from ..common.enums import LandmarkMode

@dataclass(frozen=True)
class ModeLayout:
    """Fixed tensor and partition constants of one landmark mode.

    The model output is `num_landmarks` records of `record_width` values
    (x, y, z, visibility logit, presence logit) followed by the presence flag.
    """
    mode: LandmarkMode
    num_landmarks: int
    num_primary: int
    record_width: int = 5
    presence_size: int = 1

    @property
    def num_auxiliary(self) -> int:
        return self.num_landmarks - self.num_primary

    @property
    def landmark_payload_size(self) -> int:
        return self.num_landmarks * self.record_width

    @property
    def output_size(self) -> int:
        return self.landmark_payload_size + self.presence_size

MODE_LAYOUTS: Dict[LandmarkMode, ModeLayout] = {
    LandmarkMode.FULL_BODY: ModeLayout(LandmarkMode.FULL_BODY, num_landmarks=35, num_primary=33),
    LandmarkMode.UPPER_BODY: ModeLayout(LandmarkMode.UPPER_BODY, num_landmarks=27, num_primary=25),
}

def layout_for(mode: LandmarkMode) -> ModeLayout:
    return MODE_LAYOUTS[LandmarkMode(mode)]
