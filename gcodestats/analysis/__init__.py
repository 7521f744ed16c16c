from gcodestats.analysis.document import Document, LayerRange
from gcodestats.analysis.kinematics import move_duration, transition_distance
from gcodestats.analysis.state import ExtrusionState, MachineState, ToolExtrusion

__all__ = [
    "Document",
    "ExtrusionState",
    "LayerRange",
    "MachineState",
    "ToolExtrusion",
    "move_duration",
    "transition_distance",
]
