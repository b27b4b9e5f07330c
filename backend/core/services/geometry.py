"""
Geometry Engine

Vector, angle and distance calculations shared by the kinematic analyzer.
All functions are pure: points in, numbers out, no state.

Points are anything with `x` and `y` attributes in pixel space
(Keypoint in practice).
"""

import math

import numpy as np

from ..domain.pose import Keypoint, Landmark, PoseFrame, ThrowingSide


class GeometryEngine:
    """
    Pixel-space geometry for keypoints.

    Angles between limbs are interior angles in degrees (0-180);
    line orientations are in radians as returned by atan2.

    All methods are static - no state needed.
    """

    # -------------------------------------------------------------------------
    # Core Calculations
    # -------------------------------------------------------------------------

    @staticmethod
    def distance(p1: Keypoint, p2: Keypoint) -> float:
        """Euclidean distance between two points in pixels."""
        return math.hypot(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def angle_between(a: Keypoint, b: Keypoint, c: Keypoint) -> float:
        """
        Calculate angle at b formed by a-b-c.

        Args:
            a: First point
            b: Vertex point (where angle is measured)
            c: Third point

        Returns:
            Angle in degrees (0-180). Returns 0.0 when either ray has
            zero length (occluded or collapsed keypoint).

        Example:
            For elbow angle: shoulder -> elbow -> wrist
            angle = GeometryEngine.angle_between(shoulder, elbow, wrist)
        """
        ba = np.array([a.x - b.x, a.y - b.y], dtype=float)
        bc = np.array([c.x - b.x, c.y - b.y], dtype=float)

        mag_ba = np.linalg.norm(ba)
        mag_bc = np.linalg.norm(bc)
        if mag_ba == 0 or mag_bc == 0:
            return 0.0

        cos_angle = np.dot(ba, bc) / (mag_ba * mag_bc)

        # Clamp to valid range (handles floating point errors)
        cos_angle = np.clip(cos_angle, -1.0, 1.0)

        return float(np.degrees(np.arccos(cos_angle)))

    @staticmethod
    def line_angle(p1: Keypoint, p2: Keypoint) -> float:
        """Orientation of the line p1 -> p2 in radians (-pi to pi)."""
        return math.atan2(p2.y - p1.y, p2.x - p1.x)

    @staticmethod
    def separation_angle(shoulder_line: float, hip_line: float) -> float:
        """
        Angular difference between two line orientations.

        Args:
            shoulder_line: Shoulder line angle in radians
            hip_line: Hip line angle in radians

        Returns:
            Separation in degrees, wrapped into 0-180
        """
        separation = abs(math.degrees(shoulder_line - hip_line))
        if separation > 180:
            separation = 360 - separation
        return separation

    # -------------------------------------------------------------------------
    # Throw-Specific Calculations
    # -------------------------------------------------------------------------

    @classmethod
    def shoulder_hip_separation(cls, frame: PoseFrame) -> float:
        """
        Hip-shoulder separation for one frame.

        Both lines run left to right so a square stance gives 0.
        More separation means the hips lead the shoulders.
        """
        shoulder_line = cls.line_angle(
            frame.get_keypoint(Landmark.LEFT_SHOULDER),
            frame.get_keypoint(Landmark.RIGHT_SHOULDER),
        )
        hip_line = cls.line_angle(
            frame.get_keypoint(Landmark.LEFT_HIP),
            frame.get_keypoint(Landmark.RIGHT_HIP),
        )
        return cls.separation_angle(shoulder_line, hip_line)

    @classmethod
    def elbow_angle(cls, frame: PoseFrame, side: ThrowingSide = ThrowingSide.RIGHT) -> float:
        """
        Elbow bend angle on one side.

        Returns:
            Elbow angle in degrees (180 = straight arm, 90 = right angle)
        """
        shoulder, elbow, wrist = frame.arm(side)
        return cls.angle_between(shoulder, elbow, wrist)
