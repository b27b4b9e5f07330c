"""
Pose API Schemas

Pydantic models for keypoint input and WebSocket messages.
These define the JSON structure for communication with the mobile client,
which runs the pose estimator itself and sends keypoints only.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from core.domain.pose import PoseFrame


class KeypointSchema(BaseModel):
    """
    Single body keypoint as produced by MoveNet.

    Coordinates are pixels in the analyzed frame.
    Keypoints are positional: index i is Landmark(i).
    """
    x: float = Field(..., description="Horizontal position (pixels)")
    y: float = Field(..., description="Vertical position (pixels, grows downward)")
    score: float = Field(1.0, ge=0.0, le=1.0, description="Detection confidence")
    name: Optional[str] = Field(None, description="Keypoint name (e.g., 'right_wrist')")

    class Config:
        json_schema_extra = {
            "example": {
                "x": 142.5,
                "y": 88.1,
                "score": 0.91,
                "name": "right_wrist"
            }
        }


class PoseFrameSchema(BaseModel):
    """
    All 17 keypoints for one frame.
    """
    timestamp: float = Field(..., description="Frame time in seconds")
    keypoints: List[KeypointSchema] = Field(..., description="17 MoveNet keypoints")

    def to_domain(self) -> PoseFrame:
        """Convert to a domain frame. Raises MalformedTimelineError on a wrong count."""
        return PoseFrame.from_points(
            self.timestamp,
            [(kp.x, kp.y, kp.score) for kp in self.keypoints],
        )

    class Config:
        json_schema_extra = {
            "example": {
                "timestamp": 0.0333,
                "keypoints": [
                    {"x": 128.0, "y": 40.0, "score": 0.98, "name": "nose"}
                ]
            }
        }


# =============================================================================
# WebSocket Message Schemas
# =============================================================================

class WebSocketMessageType(str, Enum):
    """Types of WebSocket messages."""
    # Client -> Server
    START_SESSION = "start_session"    # Start new throw capture (optional config)
    FRAME = "frame"                    # One raw keypoint frame
    END_SESSION = "end_session"        # Capture done, analyze the throw

    # Server -> Client
    SESSION_STARTED = "session_started"
    FRAME_ACK = "frame_ack"            # Smoothed throwing wrist for the frame
    REPORT = "report"                  # Final throw report
    ERROR = "error"                    # Error message
    SESSION_ENDED = "session_ended"


class WebSocketMessage(BaseModel):
    """
    Base WebSocket message structure.

    All WebSocket communication uses this format.
    """
    type: WebSocketMessageType = Field(..., description="Message type")
    data: dict = Field(default_factory=dict, description="Message payload")
    timestamp: int = Field(0, description="Unix timestamp in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "frame",
                "data": {"timestamp": 0.0333, "keypoints": []},
                "timestamp": 1704067200000
            }
        }


class FrameAckMessage(BaseModel):
    """
    Sent back for every accepted frame.

    Lets the client draw the smoothed wrist path while recording.
    """
    frame_number: int = Field(..., description="Frames received in this session")
    wrist_x: float = Field(..., description="Smoothed throwing wrist x (pixels)")
    wrist_y: float = Field(..., description="Smoothed throwing wrist y (pixels)")
