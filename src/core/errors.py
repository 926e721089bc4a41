class RedirectError(Exception):
    """Falha de resolução que termina em redirect para a página do projeto."""

    reason = None


class ShortNotFound(RedirectError):
    def __init__(self, short=None):
        self.short = short
        super().__init__(f"Nenhum redirect para short='{short}'" if short else "Nenhum short na URL")

    @property
    def reason(self):
        return "noRedirectFound" if self.short else "noShortFound"


class CloudNotSupported(RedirectError):
    reason = "noRedirectForCloud"

    def __init__(self, short, cloud):
        self.short = short
        self.cloud = cloud
        super().__init__(f"Nenhum redirect para short='{short}', cloud='{cloud}'")


class ExternalLookupFailure(RuntimeError):
    """Falha na consulta ao federationprovider. Nunca sai do CloudResolver."""


class RedirectTableError(ValueError):
    """Tabela de redirects malformada (detectada na carga)."""
