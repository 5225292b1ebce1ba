from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass(frozen=True)
class CrawlState:
    """Scheme and domain of the crawl root.

    Established once from the seed and only read afterwards. `domain` is the
    network location (host plus optional port); an empty domain means the
    seed could not be resolved and every URL counts as external.
    """
    scheme: str = ""
    domain: str = ""

    @classmethod
    def from_url(cls, url: str) -> "CrawlState":
        parsed = urlparse(url)
        return cls(scheme=parsed.scheme, domain=parsed.netloc)

    @property
    def is_resolved(self) -> bool:
        return bool(self.scheme and self.domain)

    @property
    def root_url(self) -> str:
        return f"{self.scheme}://{self.domain}"

    def is_internal(self, url: str) -> bool:
        if not self.domain:
            return False
        try:
            host = urlparse(url).netloc
        except ValueError:
            return False
        return host.lower() == self.domain.lower()
