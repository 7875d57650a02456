"""Slide element model consumed by the routing engine"""
from .intermediate import (
    BaseElement,
    ConnectorElement,
    GroupElement,
    ImageElement,
    NON_OBSTRUCTING_TYPES,
    ShapeElement,
    Style,
    TextElement,
)

__all__ = [
    "BaseElement",
    "ConnectorElement",
    "GroupElement",
    "ImageElement",
    "NON_OBSTRUCTING_TYPES",
    "ShapeElement",
    "Style",
    "TextElement",
]
