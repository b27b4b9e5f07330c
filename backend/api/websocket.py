"""
WebSocket Handler

Streaming throw capture via WebSocket connection.
The client sends keypoint frames as it records; each frame is smoothed
immediately and the throw is analyzed when the session ends.
"""

import json
import time
import logging
from dataclasses import dataclass, field
from typing import Optional
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from .routes import convert_report_to_schema
from .schemas import (
    AnalysisConfigSchema,
    FrameAckMessage,
    PoseFrameSchema,
    WebSocketMessageType,
)
from core.config import AnalysisSettings, get_settings
from core.domain import AnalysisError, MalformedTimelineError, NoThrowDetected, PoseFrame, Timeline
from core.services import TemporalSmoother, ThrowAnalyzer

# Configure logging
logger = logging.getLogger(__name__)


@dataclass
class ThrowSession:
    """
    Capture state for one connection.

    The smoother is created per session and never shared, so two
    athletes streaming at once cannot contaminate each other's filters.
    """
    settings: AnalysisSettings
    smoother: TemporalSmoother
    raw_frames: list[PoseFrame] = field(default_factory=list)
    smoothed_frames: list[PoseFrame] = field(default_factory=list)

    @classmethod
    def create(cls, settings: Optional[AnalysisSettings] = None) -> "ThrowSession":
        settings = settings or get_settings()
        return cls(settings=settings, smoother=TemporalSmoother(settings))

    def add_frame(self, frame: PoseFrame) -> PoseFrame:
        smoothed = self.smoother.filter_frame(frame)
        self.raw_frames.append(frame)
        self.smoothed_frames.append(smoothed)
        return smoothed

    def analyze(self):
        """Validate what was received, then analyze the smoothed frames."""
        Timeline.from_frames(self.raw_frames)
        analyzer = ThrowAnalyzer(self.settings)
        return analyzer.analyze_smoothed(Timeline(frames=tuple(self.smoothed_frames)))


class ConnectionManager:
    """
    Manages WebSocket connections.

    Handles multiple concurrent connections, one throw session each.
    """

    def __init__(self):
        self.active_connections: list[WebSocket] = []
        self.sessions: dict[WebSocket, ThrowSession] = {}

    async def connect(self, websocket: WebSocket) -> None:
        """Accept new WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)

        # Create dedicated session for this connection
        self.sessions[websocket] = ThrowSession.create()

        logger.info(f"New WebSocket connection. Total: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket) -> None:
        """Handle WebSocket disconnection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

        # Drop the filter bank with the connection
        self.sessions.pop(websocket, None)

        logger.info(f"WebSocket disconnected. Remaining: {len(self.active_connections)}")

    def get_session(self, websocket: WebSocket) -> Optional[ThrowSession]:
        """Get throw session for a connection."""
        return self.sessions.get(websocket)

    def reset_session(self, websocket: WebSocket, settings: AnalysisSettings) -> ThrowSession:
        session = ThrowSession.create(settings)
        self.sessions[websocket] = session
        return session

    async def send_json(self, websocket: WebSocket, data: dict) -> None:
        """Send JSON data to a specific connection."""
        try:
            await websocket.send_json(data)
        except Exception as e:
            logger.error(f"Failed to send WebSocket message: {e}")


# Global connection manager
manager = ConnectionManager()


def _message(msg_type: WebSocketMessageType, data: dict) -> dict:
    return {
        "type": msg_type.value,
        "data": data,
        "timestamp": int(time.time() * 1000)
    }


async def websocket_endpoint(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for streaming throw capture.

    Protocol:
    1. Client connects (a session with default settings is ready)
    2. Client optionally sends start_session with config overrides
    3. Client sends keypoint frames in capture order
    4. Client sends end_session; server replies with the report

    Message format (client -> server):
    {
        "type": "frame",
        "data": {
            "timestamp": 0.0333,
            "keypoints": [{"x": 120.0, "y": 80.0, "score": 0.9}, ...]
        },
        "timestamp": 1704067200000
    }

    Message format (server -> client):
    {
        "type": "report",
        "data": {"form_score": 90, "pred_vel_mph": "48.3", ...},
        "timestamp": 1704067200025
    }
    """
    await manager.connect(websocket)

    try:
        # Send session started message
        await manager.send_json(websocket, _message(
            WebSocketMessageType.SESSION_STARTED,
            {"message": "Connected to BioTracker throw analysis"},
        ))

        # Main message loop
        while True:
            try:
                # Receive message from client
                data = await websocket.receive_json()

                # Process based on message type
                msg_type = data.get("type")

                if msg_type == WebSocketMessageType.START_SESSION.value:
                    await handle_start(websocket, data)

                elif msg_type == WebSocketMessageType.FRAME.value:
                    await handle_frame(websocket, data)

                elif msg_type == WebSocketMessageType.END_SESSION.value:
                    await handle_end(websocket)
                    await manager.send_json(websocket, _message(
                        WebSocketMessageType.SESSION_ENDED,
                        {"message": "Session ended"},
                    ))
                    break

                else:
                    await manager.send_json(websocket, _message(
                        WebSocketMessageType.ERROR,
                        {"error": f"Unknown message type: {msg_type}"},
                    ))

            except json.JSONDecodeError:
                await manager.send_json(websocket, _message(
                    WebSocketMessageType.ERROR,
                    {"error": "Invalid JSON"},
                ))

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        manager.disconnect(websocket)


async def handle_start(websocket: WebSocket, message: dict) -> None:
    """
    Start a fresh capture, discarding any frames received so far.
    """
    try:
        config = AnalysisConfigSchema(**((message.get("data") or {}).get("config") or {}))
        settings = get_settings().with_overrides(**config.overrides())
    except ValidationError as e:
        await manager.send_json(websocket, _message(
            WebSocketMessageType.ERROR,
            {"error": f"Invalid config: {e}"},
        ))
        return

    manager.reset_session(websocket, settings)
    await manager.send_json(websocket, _message(
        WebSocketMessageType.SESSION_STARTED,
        {"message": "Capture started"},
    ))


async def handle_frame(websocket: WebSocket, message: dict) -> None:
    """
    Smooth one keypoint frame and acknowledge it.
    """
    session = manager.get_session(websocket)
    if not session:
        await manager.send_json(websocket, _message(
            WebSocketMessageType.ERROR,
            {"error": "Session not initialized"},
        ))
        return

    try:
        frame = PoseFrameSchema(**message.get("data", {})).to_domain()
    except (ValidationError, MalformedTimelineError) as e:
        await manager.send_json(websocket, _message(
            WebSocketMessageType.ERROR,
            {"error": f"Invalid frame: {e}"},
        ))
        return

    smoothed = session.add_frame(frame)
    wrist = smoothed.wrist(session.settings.throwing_side)

    ack = FrameAckMessage(
        frame_number=len(session.raw_frames) - 1,
        wrist_x=wrist.x,
        wrist_y=wrist.y,
    )
    await manager.send_json(websocket, _message(WebSocketMessageType.FRAME_ACK, ack.model_dump()))


async def handle_end(websocket: WebSocket) -> None:
    """
    Analyze the captured throw and send the report or the error.
    """
    session = manager.get_session(websocket)
    if not session:
        await manager.send_json(websocket, _message(
            WebSocketMessageType.ERROR,
            {"error": "Session not initialized"},
        ))
        return

    try:
        report = session.analyze()
    except NoThrowDetected as e:
        await manager.send_json(websocket, _message(WebSocketMessageType.ERROR, e.to_dict()))
        return
    except AnalysisError as e:
        logger.warning(f"Rejected streamed timeline: {e}")
        await manager.send_json(websocket, _message(WebSocketMessageType.ERROR, e.to_dict()))
        return

    await manager.send_json(websocket, _message(
        WebSocketMessageType.REPORT,
        convert_report_to_schema(report).model_dump(),
    ))
