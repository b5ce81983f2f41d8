"""Shared pytest configuration for arrow_template examples.

Every example renders at import time, so the ``example_app`` fixture executes
the ``app.py`` next to the requesting test with the iterator's DEBUG records
captured. Tests can then check the rendered output and, through ``caplog``,
how the traversal was steered.
"""

import importlib.util
import logging
from pathlib import Path

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest, caplog: pytest.LogCaptureFixture):
    """Render the sibling app.py in a fresh module, logging traversals."""
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(f"arrow_example_{app_path.parent.name}", app_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    with caplog.at_level(logging.DEBUG, logger="arrow_template"):
        spec.loader.exec_module(module)
    return module


@pytest.fixture
def traversal_log(example_app, caplog: pytest.LogCaptureFixture) -> list[str]:
    """Messages the iterator logged while the example rendered."""
    return [
        record.getMessage()
        for record in caplog.records
        if record.name.startswith("arrow_template.template.iterator")
    ]
