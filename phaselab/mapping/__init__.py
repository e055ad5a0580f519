"""Phase-space mapping: axis ranges and linear projection into plot coordinates."""

from phaselab.mapping.mapper import PhaseSpaceMapper, PlotViewport, map_range
from phaselab.mapping.ranges import DynamicRange, StaticRange, symmetric_range

__all__ = [
    "PhaseSpaceMapper",
    "PlotViewport",
    "map_range",
    "StaticRange",
    "DynamicRange",
    "symmetric_range",
]
