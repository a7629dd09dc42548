import pytest

from posty5.client import HttpClient
from posty5.upload import StorageUploader


@pytest.fixture
def make_http(client_config, fake_sleep):
    def factory(handler):
        return HttpClient(client_config, transport=handler.transport, sleep=fake_sleep)

    return factory


@pytest.fixture
def make_storage():
    def factory(handler):
        return StorageUploader(transport=handler.transport)

    return factory
