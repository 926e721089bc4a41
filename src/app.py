from core.redirect_table import get_redirect_table
from core.router import RouteStrategyFactory
from utils.logger import bind_correlation_id, log_info
from utils.request_utils import build_request_url

SERVICE = "nav-redirect"

# Cold start: carrega a tabela uma vez por processo
get_redirect_table()


def handler(event, context):
    bind_correlation_id(getattr(context, "aws_request_id", None))
    url = build_request_url(event)
    log_info(SERVICE, f"Request received on {url}", logCode="NAV-ENTRY-001")
    strategy = RouteStrategyFactory.resolve(url)
    return strategy.execute(event, url)
