"""
Hand landmark detection using MediaPipe, and landmark overlays.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional, List, Tuple

from .types import Gesture, Point2D, Point3D

# BGR overlay colours per gesture
GESTURE_COLORS = {
    Gesture.POINT: (0, 255, 0),
    Gesture.PALM: (255, 0, 0),
    Gesture.TWO_FINGERS: (0, 255, 255),
    Gesture.PINCH: (255, 0, 255),
}
OTHER_COLOR = (0, 0, 255)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, model_complexity: int = 1,
                 min_detection_conf: float = 0.7, min_tracking_conf: float = 0.7):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Point3D]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format, already mirrored if needed

        Returns:
            List of 21 (x, y, z) coordinates with x, y in [0..1], or None if no hand detected
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # Only the first hand is used
            hand_landmarks = results.multi_hand_landmarks[0]
            return [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]

        return None

    def close(self):
        self.hands.close()


def draw_landmarks(frame: np.ndarray, landmarks: List[Point3D], gesture: Gesture,
                   pointer: Optional[Point2D] = None) -> np.ndarray:
    """
    Draw hand landmarks coloured by gesture.

    Args:
        frame: Image to draw on, in place
        landmarks: List of (x, y, z) coordinates in [0..1] range
        gesture: Current gesture, selects the colour
        pointer: Drawing position in pixels, marked with a ring when pointing

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]
    color = GESTURE_COLORS.get(gesture, OTHER_COLOR)

    overlay = frame.copy()
    for x, y, _ in landmarks:
        cv2.circle(overlay, (int(x * width), int(y * height)), 3, color, -1, cv2.LINE_AA)
    cv2.addWeighted(overlay, 0.7, frame, 0.3, 0, frame)

    if gesture == Gesture.POINT and pointer is not None:
        cv2.circle(frame, (int(pointer[0]), int(pointer[1])), 8, (0, 255, 255), 2, cv2.LINE_AA)

    return frame
