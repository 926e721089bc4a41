import httpx
import pytest

from core.cloud_resolver import LookupResult, set_http_client
from core.clouds import CloudEnvironment
from core.redirect_table import RedirectTable

TABLE_DOCUMENT = {
    "redirects": {
        "go": {"ww": ["https://a.com"]},
        "short": {
            "ww": ["https://a.com", "https://b.com/{tenant}"],
            "gcc": ["https://a.com", "https://b.com/{tenant}"],
        },
        "admin": {
            "ww": ["https://admin.example.com", "https://admin.example.com/?tid={tenantId}"],
            "gcc": ["https://admin.example.us"],
        },
        "plain": {"ww": ["https://plain.com", "https://plain.com/static"]},
        "Portal": {"WW": ["https://portal.com"]},
    },
    "alias": {"s": "short", "chain": "s", "ADM": "admin"},
}


@pytest.fixture
def table():
    return RedirectTable.from_document(TABLE_DOCUMENT)


class FakeLookup:
    """Resolver de nuvem em memória; registra cada tenant consultado."""

    def __init__(self, *results):
        self.results = list(results) or [LookupResult()]
        self.calls = []

    def __call__(self, tenant):
        self.calls.append(tenant)
        if not tenant:
            return LookupResult()
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


@pytest.fixture
def make_lookup():
    return FakeLookup


@pytest.fixture
def gcc_result():
    return LookupResult(cloud_env=CloudEnvironment.GCC)


@pytest.fixture
def directory():
    """
    Instala um httpx.Client com MockTransport no CloudResolver.
    Uso: directory(handler) onde handler(request) -> httpx.Response.
    """
    requests = []

    def install(handler):
        def recording(request):
            requests.append(request)
            return handler(request)

        set_http_client(httpx.Client(transport=httpx.MockTransport(recording)))
        return requests

    yield install
    set_http_client(None)
