"""
presentation.py

Display rules for scan results: score colours, verdict copy, badge classes,
log lines, the score-ring animation and the artificial "scanning" delay.
None of this feeds back into scoring.
"""

import threading
from typing import Dict, Iterator, List, Optional, Tuple

# Ring circumference of the score circle (svg stroke-dasharray)
RING_CIRCUMFERENCE = 326
ANIMATION_STEP = 5
ANIMATION_INTERVAL_MS = 20

DEFAULT_SCAN_DELAY = 1.5

VERDICT_COPY: Dict[str, Tuple[str, str, str]] = {
    "LIKELY_SAFE": ("LIKELY SAFE", "No obvious social engineering patterns detected.", "success"),
    "SUSPICIOUS": ("SUSPICIOUS", "This URL has several concerning characteristics.", "warning"),
    "HIGH_RISK": ("HIGH RISK", "Strong indicators of a social engineering attempt.", "danger"),
    "INVALID_URL": ("INVALID URL", "The input could not be parsed as a URL.", "danger"),
}

BADGE_CLASSES = {"SAFE": "safe", "WARNING": "warning", "DANGER": "danger"}
LOG_CLASSES = {"warning": "warn", "danger": "err"}

CATEGORY_TITLES = (
    ("protocol", "Protocol"),
    ("domain", "Domain"),
    ("obfuscation", "Obfuscation"),
    ("pattern", "Pattern"),
)


def color_tier(score: int) -> str:
    # Not the classifier's thresholds: the ring turns red above 60.
    if score > 60:
        return "danger"
    if score >= 30:
        return "warning"
    return "success"


def verdict_copy(label: str) -> Dict[str, str]:
    title, description, color = VERDICT_COPY[label]
    return {"title": title, "description": description, "color": color}


def badge_class(status: str) -> str:
    return BADGE_CLASSES.get(status, "")


def log_line(event: Dict[str, str]) -> Dict[str, str]:
    return {
        "text": f"> {event['message']}",
        "css": LOG_CLASSES.get(event.get("severity", "info"), ""),
    }


def ring_offset(value: int) -> float:
    return RING_CIRCUMFERENCE - (RING_CIRCUMFERENCE * (value / 100))


def score_frames(score: int) -> Iterator[Tuple[int, float]]:
    """Count up to the score in steps of 5; the last frame is the score itself."""
    current = 0
    while True:
        current += ANIMATION_STEP
        if current > score:
            current = score
        yield current, ring_offset(current)
        if current == score:
            return


class ScanDelay:
    """
    Cancellable wait shown as "scanning" before results appear.

    wait() returns True when the full delay elapsed and False if cancel()
    was called first.
    """

    def __init__(self, seconds: float = DEFAULT_SCAN_DELAY):
        self.seconds = seconds
        self._cancelled = threading.Event()

    def wait(self) -> bool:
        if self.seconds <= 0:
            return not self._cancelled.is_set()
        return not self._cancelled.wait(self.seconds)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


def build_view(payload: Optional[dict]) -> dict:
    """View model for the results panel from an API /scan payload."""
    if not payload:
        return {"has_result": False}
    result = payload["result"]
    score = int(result["score"])
    details = result.get("details", {})
    badges: List[Dict[str, str]] = []
    for key, title in CATEGORY_TITLES:
        info = details.get(key, {})
        badges.append({
            "category": key,
            "title": title,
            "text": info.get("msg", ""),
            "css": badge_class(info.get("status", "")),
        })
    return {
        "has_result": True,
        "url": payload.get("url", ""),
        "score": score,
        "color": color_tier(score),
        "ring_offset": ring_offset(score),
        "frames": [value for value, _ in score_frames(score)],
        "verdict": verdict_copy(result["label"]),
        "badges": badges,
        "log": [log_line(e) for e in payload.get("trace", [])],
    }
