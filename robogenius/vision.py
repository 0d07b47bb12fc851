"""Detection boxes, non-maximum suppression and letterbox geometry."""

from __future__ import annotations

from dataclasses import dataclass

CLASS_NAMES = (
    "apple",
    "banana",
    "bell peppers",
    "chili pepper",
    "fig",
    "mangosteen",
    "kugua",
    "watermelon",
    "potato",
    "egg",
    "red egg",
    "green egg",
    "green grape",
    "stop sign",
    "purple grape",
    "yellow grape",
    "lianwuguo",
)


@dataclass
class BoxInfo:
    """A detection in network-input coordinates."""

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    score: float = 0.0
    label: int = 0


@dataclass
class MatInfo:
    """Letterbox geometry relating the network input to the source image."""

    inp_size: int = 0
    max_side: int = 0
    pad_w: int = 0
    pad_h: int = 0
    ratio: float = 1.0


def _area(box: BoxInfo) -> float:
    return (box.x2 - box.x1 + 1) * (box.y2 - box.y1 + 1)


def nms(boxes: list[BoxInfo], threshold: float) -> list[BoxInfo]:
    """Return ``boxes`` by descending score with overlapping lower-scored ones removed.

    A box is dropped when its intersection over union with a higher-scored
    box reaches ``threshold``.
    """
    ordered = sorted(boxes, key=lambda b: b.score, reverse=True)
    areas = [_area(b) for b in ordered]
    deleted = [False] * len(ordered)
    for i, first in enumerate(ordered):
        for j in range(i + 1, len(ordered)):
            if deleted[j]:
                continue
            second = ordered[j]
            w = max(0.0, min(first.x2, second.x2) - max(first.x1, second.x1) + 1)
            h = max(0.0, min(first.y2, second.y2) - max(first.y1, second.y1) + 1)
            inter = w * h
            if inter / (areas[i] + areas[j] - inter) >= threshold:
                deleted[j] = True
    return [box for box, gone in zip(ordered, deleted) if not gone]


def box_label(box: BoxInfo) -> str:
    """Return the caption drawn for a box: class name and score percentage."""
    if not 0 <= box.label < len(CLASS_NAMES):
        raise ValueError(f"unknown label {box.label}")
    return f"{CLASS_NAMES[box.label]} {box.score * 100:.1f}%"


def box_to_image_rect(box: BoxInfo, info: MatInfo) -> tuple[int, int, int, int]:
    """Map a box to ``(x, y, width, height)`` in source-image pixels."""
    x = int(box.x1 / info.ratio) - int(info.pad_w / info.ratio)
    y = int(box.y1 / info.ratio) - int(info.pad_h / info.ratio)
    w = int((box.x2 - box.x1) / info.ratio)
    h = int((box.y2 - box.y1) / info.ratio)
    return x, y, w, h