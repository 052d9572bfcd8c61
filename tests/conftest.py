import pytest

from vseo.utils.decorators import limiter


@pytest.fixture
def scratch_root(tmp_path):
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def reset_rate_limits():
    # the limiter and its in-memory counters are shared by every app instance
    limiter.reset()
    yield
    limiter.reset()
