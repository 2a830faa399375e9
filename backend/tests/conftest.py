import httpx
import pytest

from firewatch.services.firms_client import FirmsClient

from .fakes import FakeClock, FakeFirms
from .feeds import ROW_FONTANA, make_csv


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_firms():
    return FakeFirms(make_csv(ROW_FONTANA))


@pytest.fixture
def firms_client(fake_firms):
    return FirmsClient(
        map_key="TESTKEY",
        base_url="https://firms.test/api/area/csv",
        transport=httpx.MockTransport(fake_firms),
    )
