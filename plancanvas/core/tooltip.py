"""Tooltip sizing and placement from dynamic text content."""
import math
from typing import List, Optional, Tuple

from ..models.geometry import Point
from ..models.render import TooltipContent, TooltipLayout

# Average glyph width as a fraction of the font size
CHAR_WIDTH_RATIO = 0.6


def estimate_wrapped_lines(text: str, max_width: float, font_size: float) -> int:
    """Rough wrapped-line count for text rendered at font_size in max_width pixels."""
    chars_per_line = max(1, math.floor(max_width / (font_size * CHAR_WIDTH_RATIO)))
    return max(1, math.ceil(len(text) / chars_per_line))


class TooltipLayoutEngine:
    """
    Computes the box and per-line offsets of a tooltip.

    Height is estimated, not measured: each fact line is wrapped with a
    fixed average glyph width, so no font metrics are needed.
    """

    def __init__(
        self,
        width: float = 300.0,
        padding: float = 16.0,
        line_height: float = 18.0,
        font_size: float = 12.0,
        header_height: float = 40.0,
        divider_height: float = 2.0,
        section_spacing: float = 8.0,
        sub_header_height: float = 20.0,
        sub_item_height: float = 20.0,
        max_sub_items: int = 5,
        cursor_offset: Tuple[float, float] = (20.0, -10.0)
    ):
        self.width = width
        self.padding = padding
        self.line_height = line_height
        self.font_size = font_size
        self.header_height = header_height
        self.divider_height = divider_height
        self.section_spacing = section_spacing
        self.sub_header_height = sub_header_height
        self.sub_item_height = sub_item_height
        self.max_sub_items = max_sub_items
        self.cursor_offset = cursor_offset

    def _place(self, anchor: float, offset: float, size: float, limit: float) -> Tuple[float, bool]:
        """Place a box of size next to anchor along one axis, flipping and clamping."""
        pos = anchor + offset
        flipped = False
        if pos + size > limit - self.padding:
            # Not enough room on this side: mirror to the other side of the cursor
            pos = anchor - offset - size if offset > 0 else anchor - size
            flipped = True
        upper = max(self.padding, limit - size - self.padding)
        return max(self.padding, min(pos, upper)), flipped

    def layout(
        self,
        content: TooltipContent,
        anchor: Point,
        viewport_width: float,
        viewport_height: float,
        width: Optional[float] = None
    ) -> TooltipLayout:
        """
        Size and position a tooltip next to anchor.

        Args:
            content: Title, fact lines and optional sub-list
            anchor: Cursor position in screen pixels
            viewport_width: Viewport width in pixels
            viewport_height: Viewport height in pixels
            width: Box width override (defaults to the engine width)

        Returns:
            TooltipLayout with the box and (text, y offset) pairs
        """
        box_width = width if width is not None else self.width
        text_width = box_width - self.padding * 2
        lines: List[Tuple[str, float]] = [(content.title, self.padding)]

        y = self.padding + self.header_height + self.divider_height + self.section_spacing
        for text in content.lines:
            lines.append((text, y))
            y += estimate_wrapped_lines(text, text_width, self.font_size) * self.line_height
        base_height = y + self.section_spacing

        sub_height = 0.0
        if content.sub_items:
            count = len(content.sub_items)
            shown = content.sub_items[:self.max_sub_items]
            sub_y = base_height
            lines.append((content.sub_title or f"Items ({count})", sub_y))
            sub_y += self.sub_header_height
            for item in shown:
                lines.append((f"• {item}", sub_y))
                sub_y += self.sub_item_height
            if count > self.max_sub_items:
                lines.append((f"...and {count - self.max_sub_items} more", sub_y))
                sub_y += self.sub_item_height
            sub_height = sub_y - base_height + self.section_spacing

        height = base_height + sub_height + self.padding
        x, flipped_x = self._place(anchor.x, self.cursor_offset[0], box_width, viewport_width)
        top, flipped_y = self._place(anchor.y, self.cursor_offset[1], height, viewport_height)
        return TooltipLayout(
            x=x,
            y=top,
            width=box_width,
            height=height,
            lines=lines,
            flipped_x=flipped_x,
            flipped_y=flipped_y,
            padding=self.padding,
        )
