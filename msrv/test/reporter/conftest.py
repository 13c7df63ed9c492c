from __future__ import annotations

from collections.abc import Iterator

import pytest

from msrv.reporter.sinks import TestReporter


@pytest.fixture
def reporter() -> Iterator[TestReporter]:
    with TestReporter() as test_reporter:
        yield test_reporter
