from dataclasses import dataclass

from graph_grouper.annotations import STOP_MARKER


@dataclass(frozen=True)
class GrouperConfig:
    stop_marker: str = STOP_MARKER
    """substring of a node's comment that marks it as a boundary node"""

    max_label_length: int = 2048
    """longer group labels are truncated"""

    prompt: str = "Please enter group text"
    """question shown when asking the host for a group label"""

    default_label: str = "group text"
    """suggested label when the start node has no comment"""

    def __post_init__(self):
        if not self.stop_marker:
            raise ValueError("stop_marker must not be empty")
        if self.max_label_length < 1:
            raise ValueError("max_label_length must be positive")
