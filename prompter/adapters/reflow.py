"""
Paragraph reflow for messages and prompts, built on ``textwrap``.
"""

from __future__ import annotations

import re
import textwrap

from prompter.adapters.base import Reflow

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_TRAILING_SPACE = re.compile(r"\s+$")


class TextReflow(Reflow):
    """Reflow every paragraph to the right margin with a fixed indent.

    Trailing whitespace of the input is kept, so a prompt such as ``"> "``
    still leaves the cursor one space after the marker.
    """

    def wrap(self, text: str, right_margin: int, left_indent: int = 0) -> str:
        indent = " " * left_indent
        width = max(right_margin, left_indent + 1)
        trailing = ""
        match = _TRAILING_SPACE.search(text)
        if match and "\n" not in match.group(0):
            trailing = match.group(0)

        paragraphs = []
        for paragraph in _PARAGRAPH_BREAK.split(text.strip("\n")):
            flowed = " ".join(paragraph.split())
            if not flowed:
                paragraphs.append(indent.rstrip())
                continue
            paragraphs.append(
                textwrap.fill(
                    flowed,
                    width=width,
                    initial_indent=indent,
                    subsequent_indent=indent,
                    break_on_hyphens=False,
                )
            )
        return "\n\n".join(paragraphs) + trailing
