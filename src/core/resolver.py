import os
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import quote

from core.cloud_resolver import LookupResult, lookup_cloud
from core.errors import ShortNotFound
from core.identity import extract_identity
from core.redirect_table import RedirectTable
from utils.logger import log_debug, log_info

SERVICE = os.getenv("SERVICE_NAME", "nav-redirect")

TENANT_PLACEHOLDER = "{tenant}"
TENANT_ID_PLACEHOLDER = "{tenantId}"


@dataclass
class ResolutionContext:
    """Estado de uma única requisição; descartado após a resposta."""

    short: str
    tenant: Optional[str] = None
    cloud: Optional[str] = None
    tenant_id: Optional[str] = None


def encode_component(value: str) -> str:
    # Mesmo conjunto de caracteres livres do encodeURIComponent
    return quote(value, safe="-_.!~*'()")


class RedirectResolver:
    def __init__(self, table: RedirectTable, lookup: Callable[[Optional[str]], LookupResult] = lookup_cloud):
        self.table = table
        self.lookup = lookup

    def resolve(self, url: str) -> str:
        """
        Resolve a URL recebida para a URL de destino.
        Levanta ShortNotFound ou CloudNotSupported quando não há destino.
        """
        identity = extract_identity(url)
        if not identity.short:
            raise ShortNotFound(None)

        # Falha cedo, antes de qualquer chamada externa
        self.table.lookup(identity.short)

        ctx = ResolutionContext(short=identity.short, tenant=identity.tenant, cloud=identity.cloud)
        if not ctx.cloud:
            log_debug(SERVICE, "Nenhuma nuvem na URL, consultando diretório", logCode="NAV-RESOLVE-001",
                      payload={"url": url, "tenant": ctx.tenant})
            result = self.lookup(ctx.tenant)
            ctx.cloud = result.cloud_env.value
            ctx.tenant_id = result.tenant_id

        urls = self.table.targets_for(ctx.short, ctx.cloud)
        target = self.select_target(ctx, urls)

        log_info(
            SERVICE,
            "Redirect resolvido",
            logCode="NAV-RESOLVE-200",
            payload={"short": ctx.short, "tenant": ctx.tenant, "cloud": ctx.cloud, "target": target},
        )
        return target

    def select_target(self, ctx: ResolutionContext, urls) -> str:
        """Escolhe entre o destino genérico (0) e o destino por tenant (1)."""
        if not ctx.tenant or len(urls) == 1:
            return urls[0]

        template = urls[1]
        if TENANT_PLACEHOLDER in template:
            return template.replace(TENANT_PLACEHOLDER, encode_component(ctx.tenant), 1)

        if TENANT_ID_PLACEHOLDER in template:
            if not ctx.tenant_id:
                ctx.tenant_id = self.lookup(ctx.tenant).tenant_id
            if not ctx.tenant_id:
                log_info(
                    SERVICE,
                    "tenantId não encontrado, usando destino genérico",
                    logCode="NAV-RESOLVE-404-1",
                    payload={"short": ctx.short, "tenant": ctx.tenant},
                )
                return urls[0]
            return template.replace(TENANT_ID_PLACEHOLDER, encode_component(ctx.tenant_id), 1)

        return urls[0]
