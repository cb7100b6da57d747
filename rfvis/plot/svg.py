import math
import xml.etree.ElementTree as ET
from typing import Dict, List, Sequence, Tuple

###############################################################################
# Constants
###############################################################################
DEFAULT_BUNCH_STROKE_COLOR = "#c8c8c8"
FLOAT_PRECISION = 3


def fmt(value: float) -> str:
    """Format a coordinate with at most FLOAT_PRECISION decimals."""
    text = f"{value:.{FLOAT_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


###############################################################################
# SVG Element Creation Utilities
###############################################################################
def get_svg_root(width: float, height: float) -> ET.Element:
    """
    Creates an SVG root element with a 0,0 origin and given width/height.
    """
    data = {
        "viewBox": f"0 0 {fmt(width)} {fmt(height)}",
        "version": "1.1",
        "xmlns": "http://www.w3.org/2000/svg",
        "xml:space": "preserve",
        "width": fmt(width),
        "height": fmt(height),
    }
    return ET.Element("svg", data)


def add_svg_group(parent: ET.Element, css_class: str) -> ET.Element:
    return ET.SubElement(parent, "g", {"class": css_class})


def add_svg_line(
    parent: ET.Element,
    start: Tuple[float, float],
    end: Tuple[float, float],
    attrs: Dict[str, str],
) -> ET.Element:
    data = {
        "x1": fmt(start[0]),
        "y1": fmt(start[1]),
        "x2": fmt(end[0]),
        "y2": fmt(end[1]),
    }
    data.update(attrs)
    return ET.SubElement(parent, "line", data)


def add_svg_circle(
    parent: ET.Element, center: Tuple[float, float], radius: float, attrs: Dict[str, str]
) -> ET.Element:
    data = {"cx": fmt(center[0]), "cy": fmt(center[1]), "r": fmt(radius)}
    data.update(attrs)
    return ET.SubElement(parent, "circle", data)


def add_svg_path(parent: ET.Element, attrs: Dict[str, str]) -> ET.Element:
    """Add a path element to the parent and return the created element."""
    return ET.SubElement(parent, "path", attrs)


###############################################################################
# Pie Charts
###############################################################################
def build_pie_slice_path(
    center: Tuple[float, float], radius: float, start_angle: float, end_angle: float
) -> str:
    """
    Build the path of one pie slice. Angles are in radians, measured clockwise
    from twelve o'clock.
    """
    cx, cy = center
    start_x = cx + radius * math.sin(start_angle)
    start_y = cy - radius * math.cos(start_angle)
    end_x = cx + radius * math.sin(end_angle)
    end_y = cy - radius * math.cos(end_angle)
    large_arc_flag = 1 if end_angle - start_angle > math.pi else 0
    return (
        f"M {fmt(cx)} {fmt(cy)} L {fmt(start_x)} {fmt(start_y)} "
        f"A {fmt(radius)} {fmt(radius)} 0 {large_arc_flag} 1 {fmt(end_x)} {fmt(end_y)} Z"
    )


def pie_angles(values: Sequence[float]) -> List[Tuple[float, float]]:
    """Split the full circle into (start, end) angles proportional to ``values``."""
    total = sum(values)
    if total <= 0:
        return []
    angles = []
    start = 0.0
    for value in values:
        end = start + 2 * math.pi * value / total
        angles.append((start, end))
        start = end
    return angles


def add_svg_pie(
    parent: ET.Element,
    center: Tuple[float, float],
    radius: float,
    values: Sequence[float],
    colors: Sequence[str],
) -> ET.Element:
    group = add_svg_group(parent, "bunch")
    non_zero = [(v, c) for v, c in zip(values, colors) if v > 0]
    if len(non_zero) == 1:
        # A single full slice degenerates to a zero length arc
        add_svg_circle(group, center, radius, {"fill": non_zero[0][1]})
        return group
    for (start, end), (_, color) in zip(pie_angles([v for v, _ in non_zero]), non_zero):
        add_svg_path(
            group,
            {
                "d": build_pie_slice_path(center, radius, start, end),
                "fill": color,
                "stroke": DEFAULT_BUNCH_STROKE_COLOR,
                "stroke-width": "0.5",
            },
        )
    return group


def svg_to_string(svg_root: ET.Element) -> str:
    return ET.tostring(svg_root, encoding="unicode")
