import pytest

from posty5.config import ClientConfig, Settings

from tests.helpers.transport import FakeSleep

TEST_API_KEY = "test-api-key"
TEST_BASE_URL = "https://api.test.posty5"


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def client_config():
    return ClientConfig(
        base_url=TEST_BASE_URL,
        api_key=TEST_API_KEY,
        max_retries=3,
        retry_delay=0.5,
    )


@pytest.fixture
def settings():
    # Ignore any POSTY5_* variables or .env file on the test machine.
    return Settings(
        _env_file=None,
        base_url=TEST_BASE_URL,
        api_key=TEST_API_KEY,
        debug=False,
        max_retries=0,
    )


@pytest.fixture
def tmp_html_file(tmp_path):
    path = tmp_path / "landing.html"
    path.write_text("<h1>Hello</h1>", encoding="utf-8")
    return path
