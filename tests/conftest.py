"""Shared fixtures: synthetic MoveNet poses and throw timelines."""

import pytest

from core.config import AnalysisSettings
from core.domain import Keypoint, Landmark, PoseFrame, Timeline

FRAME_INTERVAL = 1.0 / 30.0

# Square-on standing pose in a 256x256 frame. Right arm bent 90 degrees
# at the elbow with the forearm pointing along +x.
BASE_POSE = {
    Landmark.NOSE: (130.0, 60.0),
    Landmark.LEFT_EYE: (125.0, 55.0),
    Landmark.RIGHT_EYE: (135.0, 55.0),
    Landmark.LEFT_EAR: (118.0, 58.0),
    Landmark.RIGHT_EAR: (142.0, 58.0),
    Landmark.LEFT_SHOULDER: (100.0, 100.0),
    Landmark.RIGHT_SHOULDER: (160.0, 100.0),
    Landmark.LEFT_ELBOW: (90.0, 150.0),
    Landmark.RIGHT_ELBOW: (160.0, 150.0),
    Landmark.LEFT_WRIST: (85.0, 195.0),
    Landmark.RIGHT_WRIST: (210.0, 150.0),
    Landmark.LEFT_HIP: (110.0, 200.0),
    Landmark.RIGHT_HIP: (150.0, 200.0),
    Landmark.LEFT_KNEE: (108.0, 250.0),
    Landmark.RIGHT_KNEE: (152.0, 250.0),
    Landmark.LEFT_ANKLE: (106.0, 300.0),
    Landmark.RIGHT_ANKLE: (154.0, 300.0),
}


def build_frame(timestamp, overrides=None):
    positions = dict(BASE_POSE)
    positions.update(overrides or {})
    return PoseFrame(
        timestamp=timestamp,
        keypoints=tuple(
            Keypoint(landmark=lm, x=positions[lm][0], y=positions[lm][1], confidence=0.9)
            for lm in Landmark
        ),
    )


@pytest.fixture
def settings():
    return AnalysisSettings()


@pytest.fixture
def make_frame():
    return build_frame


@pytest.fixture
def make_timeline():
    """Timeline where the given landmark follows `path`, one point per frame."""

    def _make(path, landmark=Landmark.RIGHT_WRIST, interval=FRAME_INTERVAL):
        return Timeline.from_frames(
            build_frame(i * interval, {landmark: point})
            for i, point in enumerate(path)
        )

    return _make


@pytest.fixture
def throw_path():
    """
    Right wrist at rest, a fast 5-frame drive along +x, then at rest.

    The forearm stays horizontal so the elbow angle is 90 throughout.
    """
    path = [(210.0, 150.0)] * 10
    path += [(210.0 + 40.0 * step, 150.0) for step in range(1, 6)]
    path += [(410.0, 150.0)] * 15
    return path


@pytest.fixture
def throw_timeline(make_timeline, throw_path):
    return make_timeline(throw_path)


@pytest.fixture
def still_timeline(make_timeline):
    return make_timeline([(210.0, 150.0)] * 30)
