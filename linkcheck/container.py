"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from linkcheck import config as env
from linkcheck.services.http_service import HttpService
from linkcheck.services.link_checker import LinkChecker
from linkcheck.services.link_extractor import HtmlLinkExtractor


# Environment variables used by the container (read via `linkcheck.config`).
#
# LINKCHECK_USER_AGENT (str, default: "linkchecker")
#   User-Agent header for every outbound HEAD and GET request.
#
# LINKCHECK_HTTP_TIMEOUT (float seconds, default: 10)
#   Timeout for each outbound request. A timed out request is reported as
#   RateLimited rather than Down.
#
# LINKCHECK_SPEED (str, default: "normal")
#   Speed preset: slow (1/1), normal (2/2), fast (10/10), furious (20/20),
#   warp (100/100) requests per second / burst.
#
# LINKCHECK_BUFFER_SIZE (int, default: 2000)
#   Capacity of the result stream. 0 means unbounded.
#
# LINKCHECK_RATE_WAIT_TIMEOUT (float seconds | optional)
#   Longest a crawl task waits for a rate limiter token before giving up on
#   a link.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.HTTP_TIMEOUT,
    "SPEED": env.DEFAULT_SPEED,
    "BUFFER_SIZE": env.BUFFER_SIZE,
    "RATE_WAIT_TIMEOUT": env.RATE_WAIT_TIMEOUT,
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for linkcheck."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.request),
        timeout=config.HTTP_TIMEOUT.as_(float),
    )

    link_extractor = providers.Singleton(
        HtmlLinkExtractor,
    )

    # One checker per crawl; callers pass per-run options such as speed or verbose.
    link_checker = providers.Factory(
        LinkChecker,
        http_service=http_service,
        link_extractor=link_extractor,
        buffer_size=config.BUFFER_SIZE.as_(int),
        rate_wait_timeout=config.RATE_WAIT_TIMEOUT,
    )
