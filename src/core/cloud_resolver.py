import json
import os
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from core.clouds import DEFAULT_CLOUD, CloudEnvironment, cloud_for_environment
from core.errors import ExternalLookupFailure
from utils.logger import get_correlation_id, log_info, log_warn

SERVICE = os.getenv("SERVICE_NAME", "nav-redirect")
FEDERATION_PROVIDER_URL = os.getenv(
    "FEDERATION_PROVIDER_URL", "https://odc.officeapps.live.com/odc/v2.1/federationprovider"
)
DEFAULT_TIMEOUT_MS = 300


def read_timeout_seconds(raw=None):
    """CLOUD_LOOKUP_TIMEOUT_MS em segundos; valor inválido volta para o padrão."""
    raw = os.getenv("CLOUD_LOOKUP_TIMEOUT_MS") if raw is None else raw
    if raw is None:
        return DEFAULT_TIMEOUT_MS / 1000
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        log_warn(
            SERVICE,
            "CLOUD_LOOKUP_TIMEOUT_MS inválido, usando o padrão",
            logCode="NAV-CLOUD-400-1",
            payload={"value": raw, "defaultMs": DEFAULT_TIMEOUT_MS},
        )
        return DEFAULT_TIMEOUT_MS / 1000
    return value / 1000


# Prazo total de cada consulta ao diretório (conexão + leitura do corpo)
LOOKUP_TIMEOUT_SECONDS = read_timeout_seconds()


_HTTP_CLIENT: httpx.Client | None = None


@dataclass(frozen=True)
class LookupResult:
    cloud_env: CloudEnvironment = DEFAULT_CLOUD
    tenant_id: Optional[str] = None


DEFAULT_RESULT = LookupResult()


def get_http_client() -> httpx.Client:
    global _HTTP_CLIENT
    if _HTTP_CLIENT is None:
        _HTTP_CLIENT = httpx.Client(timeout=httpx.Timeout(LOOKUP_TIMEOUT_SECONDS))
    return _HTTP_CLIENT


def set_http_client(client: Optional[httpx.Client]) -> None:
    """Substitui o cliente compartilhado (usado nos testes)."""
    global _HTTP_CLIENT
    _HTTP_CLIENT = client


def _read_body(resp: httpx.Response, tenant: str, deadline: float) -> bytes:
    body = bytearray()
    for chunk in resp.iter_bytes():
        body.extend(chunk)
        if time.monotonic() > deadline:
            raise ExternalLookupFailure(f"Prazo esgotado lendo resposta do diretório para '{tenant}'")
    return bytes(body)


def _fetch_federation(tenant: str) -> dict:
    """
    GET no federationprovider com prazo total de LOOKUP_TIMEOUT_SECONDS.
    Qualquer falha vira ExternalLookupFailure.
    """
    headers = {}
    corr_id = get_correlation_id()
    if corr_id:
        headers["X-Correlation-ID"] = corr_id

    deadline = time.monotonic() + LOOKUP_TIMEOUT_SECONDS
    try:
        with get_http_client().stream(
            "GET",
            FEDERATION_PROVIDER_URL,
            params={"domain": tenant},
            headers=headers,
            timeout=LOOKUP_TIMEOUT_SECONDS,
        ) as resp:
            if not resp.is_success:
                raise ExternalLookupFailure(f"Diretório respondeu HTTP {resp.status_code} para '{tenant}'")
            if time.monotonic() > deadline:
                raise ExternalLookupFailure(f"Prazo esgotado consultando diretório para '{tenant}'")
            body = _read_body(resp, tenant, deadline)
    except httpx.TimeoutException as e:
        raise ExternalLookupFailure(f"Timeout consultando diretório para '{tenant}'") from e
    except httpx.HTTPError as e:
        raise ExternalLookupFailure(f"Erro de rede consultando diretório para '{tenant}'") from e

    try:
        data = json.loads(body)
    except ValueError as e:
        raise ExternalLookupFailure(f"Resposta não-JSON do diretório para '{tenant}'") from e

    if not isinstance(data, dict):
        raise ExternalLookupFailure(f"Resposta inesperada do diretório para '{tenant}'")
    return data


def lookup_cloud(tenant: Optional[str]) -> LookupResult:
    """
    Descobre a nuvem (e o tenantId, se houver) de um domínio de tenant.
    Sem tenant, ou com falha na consulta, retorna a nuvem global.
    """
    if not tenant:
        return DEFAULT_RESULT

    start = time.time()
    try:
        data = _fetch_federation(tenant)
    except ExternalLookupFailure as e:
        log_warn(
            SERVICE,
            "Falha na consulta de nuvem, usando Global",
            logCode="NAV-CLOUD-502-1",
            payload={"tenant": tenant, "error": str(e)},
        )
        return DEFAULT_RESULT

    elapsed_ms = int((time.time() - start) * 1000)
    environment = data.get("environment")
    tenant_id = data.get("tenantId")
    if not isinstance(tenant_id, str) or not tenant_id:
        tenant_id = None

    cloud_env = DEFAULT_CLOUD
    if environment is not None:
        cloud_env = cloud_for_environment(environment)
        if cloud_env is None:
            log_warn(
                SERVICE,
                "Ambiente desconhecido retornado pelo diretório",
                logCode="NAV-CLOUD-422-1",
                payload={"tenant": tenant, "environment": environment},
            )
            cloud_env = DEFAULT_CLOUD

    log_info(
        SERVICE,
        f"Nuvem detectada para tenant {tenant}: {cloud_env.value}",
        logCode="NAV-CLOUD-200-1",
        payload={"tenant": tenant, "hasTenantId": tenant_id is not None, "elapsedMs": elapsed_ms},
    )
    return LookupResult(cloud_env=cloud_env, tenant_id=tenant_id)
