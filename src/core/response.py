import os
from urllib.parse import urlencode

FALLBACK_URL = os.getenv("FALLBACK_URL", "https://github.com/justiniven/nav.ms")


class HttpResponse:
    @staticmethod
    def redirect(location, status=302):
        return {
            "statusCode": status,
            "headers": {"Location": location, "Cache-Control": "no-store"},
            "body": "",
        }

    @staticmethod
    def project_page(reason=None):
        """Redirect para a página do projeto, com ?msg=<motivo> opcional."""
        if not reason:
            return HttpResponse.redirect(FALLBACK_URL)
        separator = "&" if "?" in FALLBACK_URL else "?"
        return HttpResponse.redirect(f"{FALLBACK_URL}{separator}{urlencode({'msg': reason})}")
