from core.response import HttpResponse
from .base_strategy import BaseStrategy
from utils.logger import log_info


class ProjectPageStrategy(BaseStrategy):
    def execute(self, event, url):
        log_info(self.SERVICE, "Path vazio, redirecionando para o projeto", logCode="NAV-ROUTE-200-1", payload={"url": url})
        return HttpResponse.project_page()
