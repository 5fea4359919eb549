"""
Pytest configuration for Nax tests.
"""
from pathlib import Path
import sys

import pytest

# Ensure the project root is on the Python path for all tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from nax.errors import CollectingReporter  # noqa: E402
from nax.interpreter import Interpreter, run_program  # noqa: E402

EXAMPLES = PROJECT_ROOT / 'examples'


@pytest.fixture
def example_source():
    """Return the text of a program from the examples directory."""
    def read(name: str) -> str:
        return (EXAMPLES / name).read_text(encoding='utf-8')
    return read


@pytest.fixture
def run_nax():
    """Run Nax source and return (status, reporter); printed output goes to stdout."""
    def run(source: str):
        reporter = CollectingReporter()
        interpreter = Interpreter(reporter=reporter)
        status = run_program(source, interpreter, reporter)
        return status, reporter
    return run
