from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit


@dataclass(frozen=True)
class Identity:
    short: Optional[str] = None
    tenant: Optional[str] = None
    cloud: Optional[str] = None


def _segment(parts, index):
    if index < len(parts) and parts[index]:
        return parts[index].lower()
    return None


def split_url(url):
    """Retorna (labels do hostname, segmentos do path sem barras iniciais)."""
    parsed = urlsplit(url)
    hostname = parsed.hostname or ""
    path = parsed.path.lstrip("/")
    return hostname.split(".") if hostname else [], path.split("/") if path else []


def has_subdomain(url):
    labels, _ = split_url(url)
    return len(labels) > 2


def extract_identity(url) -> Identity:
    """
    Extrai short, tenant e cloud da URL por posição:
      short.nav.ms/<tenant>/<cloud>
      nav.ms/<short>/<tenant>/<cloud>
    """
    labels, segments = split_url(url)
    if len(labels) > 2:
        return Identity(
            short=labels[0].lower() or None,
            tenant=_segment(segments, 0),
            cloud=_segment(segments, 1),
        )
    return Identity(
        short=_segment(segments, 0),
        tenant=_segment(segments, 1),
        cloud=_segment(segments, 2),
    )
