from core.identity import has_subdomain, split_url
from routes.project_page_strategy import ProjectPageStrategy
from routes.redirect_strategy import RedirectStrategy


class RouteStrategyFactory:
    @staticmethod
    def resolve(url: str):
        _, segments = split_url(url)
        # nav.ms/ sem short: nada a resolver
        if not segments and not has_subdomain(url):
            return ProjectPageStrategy()
        return RedirectStrategy()
