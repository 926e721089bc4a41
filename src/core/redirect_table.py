import json
import os
from pathlib import Path
from types import MappingProxyType

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.clouds import parse_cloud
from core.errors import CloudNotSupported, RedirectTableError, ShortNotFound
from utils.logger import log_info, log_warn, log_error

SERVICE = os.getenv("SERVICE_NAME", "nav-redirect")
REGION = os.getenv("AWS_DEFAULT_REGION", "us-east-1")
REDIRECTS_PATH = os.getenv("REDIRECTS_PATH")
REDIRECTS_S3_BUCKET = os.getenv("REDIRECTS_S3_BUCKET")
REDIRECTS_S3_KEY = os.getenv("REDIRECTS_S3_KEY", "redirects.json")

BUNDLED_REDIRECTS = Path(__file__).with_name("redirects.json")

_REDIRECT_TABLE = None


class RedirectTable:
    """
    Tabela somente-leitura: short -> nuvem -> (url, url_por_tenant?).
    Todas as chaves são normalizadas para minúsculas na carga.
    """

    def __init__(self, redirects, aliases):
        self._redirects = MappingProxyType(
            {short: MappingProxyType(dict(targets)) for short, targets in redirects.items()}
        )
        self._aliases = MappingProxyType(dict(aliases))

    @classmethod
    def from_document(cls, document):
        if not isinstance(document, dict):
            raise RedirectTableError("Documento de redirects deve ser um objeto JSON")

        raw_redirects = document.get("redirects", {})
        raw_aliases = document.get("alias", {})
        if not isinstance(raw_redirects, dict):
            raise RedirectTableError("'redirects' deve ser um objeto")
        if not isinstance(raw_aliases, dict):
            raise RedirectTableError("'alias' deve ser um objeto")

        redirects = {}
        for short, per_cloud in raw_redirects.items():
            if not isinstance(per_cloud, dict):
                raise RedirectTableError(f"Entrada '{short}' deve mapear nuvem -> lista de URLs")
            targets = {}
            for code, urls in per_cloud.items():
                cloud = parse_cloud(code)
                if cloud is None:
                    log_warn(
                        SERVICE,
                        "Nuvem desconhecida ignorada na tabela de redirects",
                        logCode="NAV-TABLE-400-1",
                        payload={"short": short, "cloud": code},
                    )
                    continue
                targets[cloud] = _validate_urls(short, code, urls)
            key = short.strip().lower()
            if key in redirects:
                raise RedirectTableError(f"Short duplicado (ignorando maiúsculas): '{short}'")
            redirects[key] = targets

        aliases = {}
        for alias, canonical in raw_aliases.items():
            if not isinstance(canonical, str) or not canonical.strip():
                raise RedirectTableError(f"Alias '{alias}' deve apontar para um short")
            key = alias.strip().lower()
            if key in aliases:
                raise RedirectTableError(f"Alias duplicado (ignorando maiúsculas): '{alias}'")
            if key in redirects:
                raise RedirectTableError(f"Alias '{alias}' tem o mesmo nome de um short")
            canonical = canonical.strip().lower()
            if canonical not in redirects:
                log_warn(
                    SERVICE,
                    "Alias aponta para short inexistente",
                    logCode="NAV-TABLE-400-2",
                    payload={"alias": alias, "target": canonical},
                )
            aliases[key] = canonical

        return cls(redirects, aliases)

    def __len__(self):
        return len(self._redirects)

    @property
    def aliases(self):
        return self._aliases

    def lookup(self, short):
        """Resolve short (ou alias, uma única indireção) para o mapa por nuvem."""
        key = (short or "").lower()
        if not key:
            raise ShortNotFound(short)
        if key in self._redirects:
            return self._redirects[key]
        canonical = self._aliases.get(key)
        if canonical is not None and canonical in self._redirects:
            return self._redirects[canonical]
        raise ShortNotFound(short)

    def targets_for(self, short, cloud):
        """Lista de templates de um short para a nuvem informada."""
        per_cloud = self.lookup(short)
        env = parse_cloud(cloud) if isinstance(cloud, str) else cloud
        urls = per_cloud.get(env) if env is not None else None
        if not urls:
            raise CloudNotSupported(short, cloud)
        return urls


def _validate_urls(short, cloud, urls):
    if (
        not isinstance(urls, list)
        or not 1 <= len(urls) <= 2
        or not all(isinstance(u, str) and u for u in urls)
    ):
        raise RedirectTableError(
            f"Entrada '{short}'/'{cloud}' deve ter 1 ou 2 URLs, recebido: {urls!r}"
        )
    return tuple(urls)


def _read_s3_document(bucket, key):
    try:
        log_info(SERVICE, f"Carregando redirects de s3://{bucket}/{key}", logCode="NAV-TABLE-001")
        s3 = boto3.client("s3", region_name=REGION)
        obj = s3.get_object(Bucket=bucket, Key=key)
        return json.loads(obj["Body"].read())
    except (ClientError, BotoCoreError) as e:
        log_error(
            SERVICE,
            "Erro AWS ao ler tabela de redirects do S3",
            logCode="NAV-TABLE-500-1",
            payload={"bucket": bucket, "key": key, "error": str(e)},
        )
        raise RuntimeError(f"Erro AWS S3: {e}")


def _read_file_document(path):
    log_info(SERVICE, f"Carregando redirects de {path}", logCode="NAV-TABLE-002")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_redirect_table(path=None, bucket=None, key=None):
    """
    Carrega a tabela de redirects.
    1️⃣ S3 (REDIRECTS_S3_BUCKET/REDIRECTS_S3_KEY), se configurado
    2️⃣ Arquivo local (REDIRECTS_PATH)
    3️⃣ redirects.json empacotado junto deste módulo
    """
    bucket = bucket or REDIRECTS_S3_BUCKET
    try:
        if bucket:
            document = _read_s3_document(bucket, key or REDIRECTS_S3_KEY)
        else:
            document = _read_file_document(path or REDIRECTS_PATH or BUNDLED_REDIRECTS)
    except json.JSONDecodeError as e:
        raise RedirectTableError(f"JSON inválido na tabela de redirects: {e}") from e

    table = RedirectTable.from_document(document)
    log_info(
        SERVICE,
        "Tabela de redirects carregada",
        logCode="NAV-TABLE-200",
        payload={"shorts": len(table), "aliases": len(table.aliases)},
    )
    return table


def get_redirect_table():
    """Tabela compartilhada pelo processo (carregada no cold start)."""
    global _REDIRECT_TABLE
    if _REDIRECT_TABLE is None:
        _REDIRECT_TABLE = load_redirect_table()
    return _REDIRECT_TABLE
