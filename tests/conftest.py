"""Shared fixtures for the bodygraph server tests."""
import re

import pytest

from app import create_app

# Gate marker followed by its number label
GATE_MARKER = re.compile(
    r'<circle cx="[^"]+" cy="[^"]+" r="15" fill="(#[0-9a-f]+)" stroke="#ddd"/>'
    r'<text [^>]*>(\d+)</text>'
)


def parse_gate_fills(svg):
    """{gate: fill color} for every gate marker in the markup"""
    return {int(gate): fill for fill, gate in GATE_MARKER.findall(svg)}


@pytest.fixture
def gate_fills():
    return parse_gate_fills


@pytest.fixture
def app():
    app = create_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
