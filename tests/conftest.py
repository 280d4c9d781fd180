"""
Pytest configuration and fixtures.
"""

from typing import List, Tuple

import pytest

from pdf2cad.cad.generator import CADGenerator
from pdf2cad.models.primitives import VectorElement
from pdf2cad.utils.config_loader import GeneratorConfig


class RecordingReporter:
    """Reporter that keeps every diagnostic for assertions."""

    def __init__(self):
        self.infos: List[str] = []
        self.warnings: List[str] = []
        self.skips: List[Tuple[int, str, str]] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def skipped(self, index: int, kind: str, reason: str) -> None:
        self.skips.append((index, kind, reason))


@pytest.fixture(scope="function")
def test_config():
    """Default generator configuration."""
    return GeneratorConfig()


@pytest.fixture(scope="function")
def reporter():
    """Reporter collecting diagnostics."""
    return RecordingReporter()


@pytest.fixture(scope="function")
def generator(test_config, reporter):
    """Generator with default config and a recording reporter."""
    return CADGenerator(config=test_config, reporter=reporter)


@pytest.fixture(scope="function")
def sample_vectors():
    """Mixed vector input: two lines and one unsupported circle."""
    return [
        VectorElement.line(0, 0, 100, 100),
        VectorElement("circle", (50.0, 50.0, 25.0)),
        VectorElement.line(10, 20, 30, 40, thickness=0.5),
    ]


@pytest.fixture(scope="function")
def sample_texts():
    """Three extracted strings."""
    return ["TITLE BLOCK", "SCALE 1:1", "REV A"]


@pytest.fixture(scope="function")
def output_dxf(tmp_path):
    """Destination path inside a not yet existing directory."""
    return tmp_path / "out" / "drawing.dxf"
