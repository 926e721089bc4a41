def get_header(event, name):
    """Busca um header sem diferenciar maiúsculas (v1 usa 'Host', v2 usa 'host')."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_path(event):
    return event.get("rawPath") or event.get("path") or "/"


def get_host(event):
    host = get_header(event, "host") or (event.get("requestContext") or {}).get("domainName") or ""
    return host.split(":", 1)[0]


def build_request_url(event):
    """Reconstrói a URL pública da requisição a partir do evento do API Gateway."""
    url = f"https://{get_host(event)}{get_path(event)}"
    query = event.get("rawQueryString")
    return f"{url}?{query}" if query else url
