# src/ast3d_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class DiagramIssueCode(Enum):
    """
    Registry of diagram issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Identity & Reference Issues (reported as errors) ---
    DUPLICATE_NODE_ID = ("DUPLICATE_NODE_ID", "Duplicate node ID: {node_id}")
    UNKNOWN_SOURCE_NODE = ("UNKNOWN_SOURCE_NODE", "Connection references unknown source node: {node_id}")
    UNKNOWN_TARGET_NODE = ("UNKNOWN_TARGET_NODE", "Connection references unknown target node: {node_id}")

    # --- Anchor Issues ---
    UNKNOWN_FACE = ("UNKNOWN_FACE", "Connection '{connection_id}' anchors to face '{face_id}', which a {geometry} node '{node_id}' does not have. Available faces: {available_faces}.")

    # --- Property Issues ---
    INVALID_COLOR = ("INVALID_COLOR", "Node '{node_id}' has an unrecognized color '{value}'.")
    OPACITY_RANGE = ("OPACITY_RANGE", "Node '{node_id}' has opacity '{value}', which is not a number in [0, 1].")
    INVALID_SCALE = ("INVALID_SCALE", "Node '{node_id}' has scale '{value}', which is not a positive number or triple; a unit scale is used.")
    INVALID_POSITION = ("INVALID_POSITION", "Node '{node_id}' has position '{value}', which is not a 3-component vector; the node is placed by the layout.")

    # --- Structure Issues ---
    CYCLE_DETECTED = ("CYCLE_DETECTED", "Connections form a cycle: {cycle}.")
    CONNECTION_DROPPED = ("CONNECTION_DROPPED", "Connection '{connection_id}' was dropped because node '{node_id}' is not declared.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
