"""Flow simulation."""

from .network import (
    SPLIT_PERCENT,
    ActiveSegment,
    FlowMode,
    FlowNetwork,
    FlowPhase,
    VisitedPorts,
)

__all__ = [
    "SPLIT_PERCENT",
    "ActiveSegment",
    "FlowMode",
    "FlowNetwork",
    "FlowPhase",
    "VisitedPorts",
]
