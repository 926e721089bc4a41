from abc import ABC, abstractmethod


class BaseStrategy(ABC):
    SERVICE = "nav-redirect"

    @abstractmethod
    def execute(self, event, url):
        """Recebe o evento do Lambda e a URL pública; retorna a resposta proxy."""
