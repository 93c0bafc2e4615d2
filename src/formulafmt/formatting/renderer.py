"""
renders a document tree into lines.

follows Philip Wadler's "A prettier printer": a group is laid out flat
when its whole flat width fits on the current line, otherwise its line
breaks are taken. every group is tested on its own, so a broken group may
still contain flat ones.
"""
from enum import Enum, auto
from typing import List

from .nodes import FormatNode, Group, Indent, Line, Nodes, SpaceOrLine, Text

SPACE = " "


class WrapMode(Enum):
    # breaks render as breaks
    ENABLED = auto()
    # breaks render flat
    DETECT = auto()


class Renderer:
    def __init__(self, tab_width: int, line_width: int):
        self.line_width = line_width
        self.tab = SPACE * tab_width
        self.lines: List[List[str]] = [[]]
        self.indent_level = 0
        # the first line is preceded by the formula's leading '='
        self.column = 1

    def render(self, node: FormatNode) -> List[str]:
        self._render(node, WrapMode.DETECT)
        return ["".join(fragments) for fragments in self.lines]

    def _render(self, node: FormatNode, wrap_mode: WrapMode):
        if isinstance(node, Group):
            if self.column + node.width > self.line_width:
                wrap_mode = WrapMode.ENABLED
            else:
                wrap_mode = WrapMode.DETECT
            self._render_children(node, wrap_mode)
        elif isinstance(node, Indent):
            indent = wrap_mode == WrapMode.ENABLED
            if indent:
                self.indent_level += 1
                self._insert_text(self.tab)
            self._render_children(node, wrap_mode)
            if indent:
                self.indent_level -= 1
        elif isinstance(node, Nodes):
            self._render_children(node, wrap_mode)
        elif isinstance(node, Text):
            self._insert_text(node.text)
        elif isinstance(node, SpaceOrLine):
            if wrap_mode == WrapMode.ENABLED:
                self._insert_line()
            else:
                self._insert_text(SPACE)
        elif isinstance(node, Line):
            if wrap_mode == WrapMode.ENABLED:
                self._insert_line()
        else:
            raise TypeError(f"unhandled format node: {type(node).__name__}")

    def _render_children(self, node: Nodes, wrap_mode: WrapMode):
        for child in node.children:
            self._render(child, wrap_mode)

    def _insert_text(self, text: str):
        if not text:
            return
        self.lines[-1].append(text)
        self.column += len(text)

    def _insert_line(self):
        prefix = self.tab * self.indent_level
        self.lines.append([prefix])
        self.column = len(prefix)


def render(document: FormatNode, tab_width: int, line_width: int) -> List[str]:
    """renders a document tree into output lines."""
    return Renderer(tab_width, line_width).render(document)
