"""
Pose Domain Models

Data structures for representing the per-frame body keypoints
produced by an external pose estimator (MoveNet / COCO layout).

The estimator returns 17 keypoints per frame, in pixel coordinates:
https://www.tensorflow.org/hub/tutorials/movenet
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Iterable, Optional, Sequence

from .errors import MalformedTimelineError


class Landmark(IntEnum):
    """
    MoveNet keypoint indices.

    Every frame carries all 17 landmarks in exactly this order.
    """
    # Face
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4

    # Upper body
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10

    # Lower body
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16


NUM_LANDMARKS = len(Landmark)


class ThrowingSide(str, Enum):
    """Which arm throws. Determines the tracked wrist and measured elbow."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Keypoint:
    """
    A single body landmark at one frame.

    Attributes:
        landmark: Which body part this keypoint represents
        x: Horizontal position in pixels
        y: Vertical position in pixels (grows downward)
        confidence: Detection score from the estimator (0.0 to 1.0)
    """
    landmark: Landmark
    x: float
    y: float
    confidence: float = 1.0

    def with_position(self, x: float, y: float) -> "Keypoint":
        """Return a copy at a new position. Keypoints are never mutated."""
        return replace(self, x=x, y=y)


@dataclass(frozen=True)
class PoseFrame:
    """
    All 17 keypoints for a single video frame.

    Attributes:
        timestamp: Frame time in seconds
        keypoints: Exactly 17 keypoints, ordered by Landmark index
    """
    timestamp: float
    keypoints: tuple[Keypoint, ...]

    def get_keypoint(self, landmark: Landmark) -> Keypoint:
        """Get a specific keypoint by landmark."""
        return self.keypoints[landmark.value]

    def arm(self, side: ThrowingSide) -> tuple[Keypoint, Keypoint, Keypoint]:
        """Get arm keypoints (shoulder, elbow, wrist) for one side."""
        if side == ThrowingSide.LEFT:
            return (
                self.get_keypoint(Landmark.LEFT_SHOULDER),
                self.get_keypoint(Landmark.LEFT_ELBOW),
                self.get_keypoint(Landmark.LEFT_WRIST),
            )
        return (
            self.get_keypoint(Landmark.RIGHT_SHOULDER),
            self.get_keypoint(Landmark.RIGHT_ELBOW),
            self.get_keypoint(Landmark.RIGHT_WRIST),
        )

    def wrist(self, side: ThrowingSide) -> Keypoint:
        return self.arm(side)[2]

    @classmethod
    def from_points(
        cls,
        timestamp: float,
        points: Sequence[tuple[float, float, float]],
    ) -> "PoseFrame":
        """Build a frame from (x, y, confidence) triples in landmark order."""
        if len(points) != NUM_LANDMARKS:
            raise MalformedTimelineError(
                f"Expected {NUM_LANDMARKS} keypoints per frame, got {len(points)}"
            )
        keypoints = tuple(
            Keypoint(landmark=Landmark(i), x=float(x), y=float(y), confidence=float(c))
            for i, (x, y, c) in enumerate(points)
        )
        return cls(timestamp=float(timestamp), keypoints=keypoints)


@dataclass(frozen=True)
class Timeline:
    """
    Ordered sequence of pose frames for one analysis request.

    Timestamps are expected to increase with a nominal 1/30 s step.
    A single non-increasing step is tolerated (the smoothing filter
    freezes over it); two in a row mean the upstream ordering is broken.
    """
    frames: tuple[PoseFrame, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def __getitem__(self, index: int) -> PoseFrame:
        return self.frames[index]

    @classmethod
    def from_frames(cls, frames: Iterable[PoseFrame]) -> "Timeline":
        """Build a timeline and check its structural preconditions."""
        timeline = cls(frames=tuple(frames))
        timeline.validate()
        return timeline

    def validate(self) -> None:
        """
        Reject timelines that would silently produce a wrong report.

        Raises:
            MalformedTimelineError: wrong landmark count or order,
                non-finite values, or consecutive non-increasing timestamps
        """
        previous_step_bad = False
        latest: Optional[float] = None

        for index, frame in enumerate(self.frames):
            if len(frame.keypoints) != NUM_LANDMARKS:
                raise MalformedTimelineError(
                    f"Frame {index} has {len(frame.keypoints)} keypoints, "
                    f"expected {NUM_LANDMARKS}"
                )
            if not math.isfinite(frame.timestamp):
                raise MalformedTimelineError(f"Frame {index} has a non-finite timestamp")

            for position, kp in enumerate(frame.keypoints):
                if kp.landmark != position:
                    raise MalformedTimelineError(
                        f"Frame {index} keypoint {position} is {kp.landmark.name}, "
                        f"expected {Landmark(position).name}"
                    )
                if not (math.isfinite(kp.x) and math.isfinite(kp.y)):
                    raise MalformedTimelineError(
                        f"Frame {index} has non-finite coordinates for {kp.landmark.name}"
                    )

            # Compared against the latest accepted time, which is what the
            # filters hold as their previous timestamp
            if latest is not None:
                step_bad = frame.timestamp <= latest
                if step_bad and previous_step_bad:
                    raise MalformedTimelineError(
                        f"Timestamps stop increasing at frame {index} "
                        f"({frame.timestamp} is not after {latest})"
                    )
                previous_step_bad = step_bad
                latest = max(latest, frame.timestamp)
            else:
                latest = frame.timestamp
