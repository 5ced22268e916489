# src/ast3d_core/model/exceptions.py
from typing import List

from ..errors import DiagnosableError, format_diagnostic_report


class UnknownNodeError(DiagnosableError):
    """
    Raised by the Graph mutation API when a connection names a node that is not
    in the graph. The builder never triggers this: it drops such connections
    before registering them.
    """
    def __init__(self, connection_id: str, missing_node_ids: List[str]):
        self.connection_id = connection_id
        self.missing_node_ids = missing_node_ids
        super().__init__(str(self))

    def __str__(self):
        return (
            f"Cannot add connection '{self.connection_id}': "
            f"node(s) {self.missing_node_ids} not found in the graph."
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unknown Node",
            details=str(self),
            suggestion="Add both endpoint nodes to the graph before connecting them.",
            context={'node_id': ", ".join(self.missing_node_ids)}
        )
