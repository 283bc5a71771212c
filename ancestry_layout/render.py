"""Preview drawing of a computed layout.

Cards are drawn as rounded boxes and parent/child connectors as elbow paths,
the way the descendants chart draws them. Generations run along x, so a
card's width (its extent along the breadth axis) becomes its height here and
its height becomes the box width.
"""

import logging

import svgwrite

from .config import Direction
from .result import LayoutResult

logger = logging.getLogger(__name__)

margin = 20
text_font = "Georgia, 'Times New Roman', Times, serif"

photo_fill, photo_stroke = "#E3F2FD", "#4A90E2"
text_fill, text_stroke = "#FCE4EC", "#FF6EC7"


def _label(node, label_field: str) -> str:
    value = node.record.extra.get(label_field)
    return str(value if value is not None else node.id)


def render_svg(
    result: LayoutResult, outfile, direction=Direction.LTR, label_field: str = "name"
):
    extent = result.extent
    deepest = max((node.height for node in result.nodes), default=0)
    widest = max((node.width for node in result.nodes), default=0)

    dx = margin + deepest / 2 - extent.min_x
    dy = margin + widest / 2 - extent.min_y
    width = extent.width + deepest + 2 * margin
    height = extent.height + widest + 2 * margin

    dwg = svgwrite.Drawing(str(outfile), size=(width, height))

    # connectors first so the cards cover their ends
    sign = -1 if Direction(direction) is Direction.RTL else 1
    half_height = {node.id: node.height / 2 for node in result.nodes}
    for edge in result.connections:
        px = edge.parent.x + dx + sign * half_height[edge.parent.id]
        py = edge.parent.y + dy
        for child in edge.children:
            cx = child.x + dx - sign * half_height[child.id]
            cy = child.y + dy
            x_mid = (px + cx) / 2
            d = f"M {px},{py} L {x_mid},{py} L {x_mid},{cy} L {cx},{cy}"
            dwg.add(dwg.path(d=d, stroke="lightgray", fill="none", stroke_width=1.2))

    for node in result.nodes:
        x, y = node.x + dx, node.y + dy
        if node.photo_url:
            fill, stroke = photo_fill, photo_stroke
        else:
            fill, stroke = text_fill, text_stroke
        dwg.add(
            dwg.rect(
                insert=(x - node.height / 2, y - node.width / 2),
                size=(node.height, node.width),
                fill=fill,
                stroke=stroke,
                stroke_width=1.5,
                rx=4,
            )
        )
        dwg.add(
            dwg.text(
                _label(node, label_field),
                insert=(x, y),
                text_anchor="middle",
                dominant_baseline="middle",
                font_size="10px",
                font_family=text_font,
                fill="black",
            )
        )

    dwg.save()
    logger.info("SVG file created: %s", outfile)
    return outfile
