"""SVG rendering of the bodygraph: fixed centers, channels and gate markers."""
from collections.abc import Mapping
import logging
import math

logger = logging.getLogger(__name__)

# Canvas size in SVG user units
WIDTH, HEIGHT = 400, 680

CENTER_RADIUS = 35
CENTER_SIDE = 70
GATE_RING_RADIUS = 70
GATE_RADIUS = 15

ACTIVE_COLOR = '#ff4444'
INACTIVE_COLOR = '#eee'

# Centers in drawing order
CENTERS = [
    {'name': 'Head', 'x': 200, 'y': 80, 'shape': 'circle', 'gates': [64, 61, 63]},
    {'name': 'Ajna', 'x': 200, 'y': 150, 'shape': 'circle', 'gates': [47, 24, 4]},
    {'name': 'Throat', 'x': 200, 'y': 220, 'shape': 'square',
     'gates': [62, 23, 56, 35, 12, 45, 33, 8, 31, 20, 16]},
    # No drawing branch for 'diamond': only the label is rendered.
    {'name': 'G', 'x': 200, 'y': 350, 'shape': 'diamond', 'gates': [1, 2, 7, 10, 13, 15, 25]},
    {'name': 'Sacral', 'x': 200, 'y': 480, 'shape': 'circle', 'gates': [5, 14, 29, 9, 3, 42, 27]},
]

# Decorative connectors, not derived from gate data
CHANNELS = [
    'M200,105 L200,145',
    'M200,170 L200,210',
    'M200,240 L200,340',
]


def is_gate_active(bodygraph, gate):
    """Accepts either a set of gates or a {gate: bool} mapping."""
    if isinstance(bodygraph, Mapping):
        return bool(bodygraph.get(gate, False))
    return gate in bodygraph


def gate_color(active):
    return ACTIVE_COLOR if active else INACTIVE_COLOR


def gate_positions(center):
    """Yield (gate, x, y) for each gate, evenly spaced on a ring around the center"""
    total_gates = len(center['gates'])
    for i, gate in enumerate(center['gates']):
        angle = i * (2 * math.pi / total_gates)
        x = center['x'] + GATE_RING_RADIUS * math.cos(angle)
        y = center['y'] + GATE_RING_RADIUS * math.sin(angle)
        yield gate, x, y


def render_center(center):
    """Shape (if the shape kind is known) followed by the name label"""
    parts = []
    x, y = center['x'], center['y']

    if center['shape'] == 'circle':
        parts.append(
            f'<circle cx="{x:.0f}" cy="{y:.0f}" r="{CENTER_RADIUS}" '
            f'fill="#fff" stroke="#ddd" stroke-width="2"/>'
        )
    elif center['shape'] == 'square':
        half = CENTER_SIDE / 2
        parts.append(
            f'<rect x="{x - half:.0f}" y="{y - half:.0f}" width="{CENTER_SIDE}" height="{CENTER_SIDE}" '
            f'fill="#fff" stroke="#ddd" stroke-width="2"/>'
        )
    else:
        logger.debug(f"No shape drawn for center {center['name']} (shape '{center['shape']}')")

    parts.append(
        f'<text x="{x:.0f}" y="{y + 5:.0f}" font-size="14" text-anchor="middle">{center["name"]}</text>'
    )
    return ''.join(parts)


def render_gates(center, bodygraph):
    parts = []
    for gate, x, y in gate_positions(center):
        color = gate_color(is_gate_active(bodygraph, gate))
        parts.append(f'<circle cx="{x:.1f}" cy="{y:.1f}" r="{GATE_RADIUS}" fill="{color}" stroke="#ddd"/>')
        parts.append(
            f'<text x="{x:.1f}" y="{y:.1f}" font-size="12" text-anchor="middle" dy=".3em">{gate}</text>'
        )
    return ''.join(parts)


def generate_svg(bodygraph):
    """
    Render the bodygraph as a standalone SVG string.

    Layers, bottom to top: white background, channels, center shapes with
    labels, gate markers with numbers. A gate is red when it is active in
    `bodygraph` (a set of gate numbers or a {gate: bool} mapping) and gray
    otherwise. Output is identical for identical input.
    """
    parts = [
        f'<svg viewBox="0 0 {WIDTH} {HEIGHT}" xmlns="http://www.w3.org/2000/svg">',
        '<rect width="100%" height="100%" fill="#fff"/>',
    ]

    for path in CHANNELS:
        parts.append(f'<path d="{path}" stroke="#eee" stroke-width="8"/>')

    for center in CENTERS:
        parts.append(render_center(center))

    logger.debug(f"Bodygraph background and centers: {''.join(parts)}")

    for center in CENTERS:
        parts.append(render_gates(center, bodygraph))

    parts.append('</svg>')
    svg = ''.join(parts)
    logger.debug(f"Bodygraph SVG: {svg}")
    return svg
