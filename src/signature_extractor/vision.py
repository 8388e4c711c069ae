"""Boundary to a remote vision model that locates signatures.

The HTTP client itself lives outside this package. Callers construct a
:class:`VisionSignatureClient` around a transport callable that sends the
page image and returns the model's JSON answer; this module only shapes
the request and parses the response into rectangles.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Union

from .exceptions import VisionResponseError
from .geometry import NaturalRect, NormalizedRect

logger = logging.getLogger(__name__)

# Models answer on an integer 0-1000 grid
RESPONSE_SCALE = 1000

PROMPT = (
    "Identify all handwritten signatures in this document. Return the bounding "
    "boxes for each signature. Ignore printed text unless it overlaps "
    "significantly. Return coordinates on a scale of 0 to 1000."
)

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "signatures": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "ymin": {"type": "integer", "description": "Top Y coordinate (0-1000)"},
                    "xmin": {"type": "integer", "description": "Left X coordinate (0-1000)"},
                    "ymax": {"type": "integer", "description": "Bottom Y coordinate (0-1000)"},
                    "xmax": {"type": "integer", "description": "Right X coordinate (0-1000)"},
                },
                "required": ["ymin", "xmin", "ymax", "xmax"],
            },
        }
    },
}

Transport = Callable[[bytes, str, Dict[str, Any]], Union[str, Dict[str, Any], None]]


def parse_vision_response(payload: Union[str, Dict[str, Any], None]) -> List[NormalizedRect]:
    """Convert a model answer into normalized rectangles.

    An empty answer means no signatures.

    Raises:
        VisionResponseError: If the payload is not valid JSON or a box is malformed
    """
    if not payload:
        return []
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise VisionResponseError(f"Response is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise VisionResponseError("Response must be a JSON object",
                                  {"type": type(payload).__name__})

    rects = []
    for index, box in enumerate(payload.get("signatures") or []):
        try:
            xmin, ymin = float(box["xmin"]), float(box["ymin"])
            xmax, ymax = float(box["xmax"]), float(box["ymax"])
        except (KeyError, TypeError, ValueError) as e:
            raise VisionResponseError("Malformed signature box",
                                      {"index": index, "error": e}) from e
        rects.append(NormalizedRect(
            x=xmin / RESPONSE_SCALE,
            y=ymin / RESPONSE_SCALE,
            width=(xmax - xmin) / RESPONSE_SCALE,
            height=(ymax - ymin) / RESPONSE_SCALE,
        ))
    return rects


def to_natural_rects(
    rects: List[NormalizedRect],
    natural_width: int,
    natural_height: int,
    min_size: float = 5,
) -> List[NaturalRect]:
    """Scale normalized rectangles to natural pixels, dropping tiny ones.

    Regions of ``min_size`` pixels or less in either dimension are dropped.
    """
    natural = []
    for rect in rects:
        scaled = rect.to_natural(natural_width, natural_height)
        if scaled.width > min_size and scaled.height > min_size:
            natural.append(scaled)
        else:
            logger.debug("Dropping tiny region %s", scaled)
    return natural


class VisionSignatureClient:
    """Explicitly constructed client for a vision-model signature detector.

    Args:
        transport: Callable ``(image_bytes, prompt, schema) -> answer`` that
            performs the remote call
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    def detect(self, image_bytes: bytes) -> List[NormalizedRect]:
        """Ask the model for signature boxes on one page."""
        logger.info("Requesting signature boxes from vision model (%d bytes)", len(image_bytes))
        answer = self.transport(image_bytes, PROMPT, RESPONSE_SCHEMA)
        rects = parse_vision_response(answer)
        logger.info("Vision model reported %d signature(s)", len(rects))
        return rects
