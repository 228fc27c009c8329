"""Global pytest configuration.

Registers the sample-graph fixture plugin ``tests.algorithms.sample_graphs``
so every test module can request the shared flow networks by name. Resets
package logging between tests so level changes made by one test (e.g. CLI
``--verbose``) do not leak into the next.
"""

from __future__ import annotations

import pytest

from flowcut.logging import reset_logging, setup_root_logger

pytest_plugins = ["tests.algorithms.sample_graphs"]


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    setup_root_logger()
    yield
    reset_logging()
    setup_root_logger()
