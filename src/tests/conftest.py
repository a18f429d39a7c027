import pytest

from multical.converter import CalendarConverter
from multical.profiles import BUNDLED_PROFILES_DIR, CalendarProfileRegistry


def pytest_addoption(parser):
    parser.addoption(
        "--profiles-dir",
        action="store",
        default=None,
        help="Directory holding calendar_<id>.json profiles (default: bundled profiles)",
    )


@pytest.fixture(scope="session")
def profiles_dir(request):
    return request.config.getoption("--profiles-dir") or str(BUNDLED_PROFILES_DIR)


@pytest.fixture(scope="session")
def registry(profiles_dir):
    """Registry built once per session, shared read-only by every test."""
    return CalendarProfileRegistry.from_directory(profiles_dir)


@pytest.fixture(scope="session")
def converter(registry):
    return CalendarConverter(registry)
