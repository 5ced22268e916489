# src/ast3d_core/parser/cursor.py
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class LineCursor:
    """
    Explicit read position over the trimmed, non-blank lines of one parse pass.

    The statement loop and the property-block reader share one cursor: when a node
    declaration is followed by a `{ ... }` block, the block reader advances the
    cursor past the closing brace so the loop resumes after it.
    """
    lines: List[str]
    index: int = 0
    # 1-based source line numbers of `lines`, for diagnostics.
    line_numbers: List[int] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "LineCursor":
        lines, numbers = [], []
        for number, raw in enumerate(text.splitlines(), start=1):
            stripped = raw.strip()
            if stripped:
                lines.append(stripped)
                numbers.append(number)
        return cls(lines=lines, line_numbers=numbers)

    def has_current(self) -> bool:
        return self.index < len(self.lines)

    @property
    def current(self) -> str:
        return self.lines[self.index]

    @property
    def current_line_number(self) -> int:
        if self.line_numbers and self.index < len(self.line_numbers):
            return self.line_numbers[self.index]
        return self.index + 1

    def peek(self, offset: int = 1) -> Optional[str]:
        position = self.index + offset
        if 0 <= position < len(self.lines):
            return self.lines[position]
        return None

    def advance(self, steps: int = 1) -> None:
        self.index += steps
