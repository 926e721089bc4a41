from core.cloud_resolver import lookup_cloud
from core.errors import RedirectError
from core.redirect_table import get_redirect_table
from core.resolver import RedirectResolver
from core.response import HttpResponse
from .base_strategy import BaseStrategy
from utils.logger import log_warn, log_error


class RedirectStrategy(BaseStrategy):
    def __init__(self, table=None, lookup=None):
        self.resolver = RedirectResolver(
            table if table is not None else get_redirect_table(),
            lookup or lookup_cloud,
        )

    def execute(self, event, url):
        """Resolve o short da URL e responde sempre com um redirect 302"""
        try:
            target = self.resolver.resolve(url)
            return HttpResponse.redirect(target)

        except RedirectError as e:
            # Short ou nuvem sem destino: página do projeto com o motivo
            log_warn(
                self.SERVICE,
                str(e),
                logCode="NAV-REDIR-404-1",
                payload={"url": url, "reason": e.reason},
            )
            return HttpResponse.project_page(e.reason)

        except Exception as e:
            log_error(self.SERVICE, "Erro inesperado ao resolver redirect", logCode="NAV-REDIR-500-FINAL",
                      payload={"url": url}, exc_info=e)
            return HttpResponse.project_page()
