from enum import Enum


class CloudEnvironment(str, Enum):
    """Ambientes de nuvem suportados nas tabelas de redirect."""

    WW = "ww"
    GCC = "gcc"
    DOD = "dod"
    CN = "cn"


DEFAULT_CLOUD = CloudEnvironment.WW

# Nome do ambiente retornado pelo federationprovider -> código da nuvem
ENVIRONMENT_NAMES = {
    "global": CloudEnvironment.WW,
    "microsoftonline.us": CloudEnvironment.GCC,
    "microsoftonline.mil": CloudEnvironment.DOD,
    "partner.microsoftonline.cn": CloudEnvironment.CN,
}


def parse_cloud(code):
    """Converte um código ('gcc', 'DoD'...) em CloudEnvironment, ou None."""
    if not code:
        return None
    try:
        return CloudEnvironment(code.strip().lower())
    except ValueError:
        return None


def cloud_for_environment(name):
    """
    Mapeia o 'environment' do diretório externo para CloudEnvironment.
    Retorna None quando o nome não é reconhecido (o chamador decide o fallback).
    """
    if not isinstance(name, str):
        return None
    return ENVIRONMENT_NAMES.get(name.strip().lower())
