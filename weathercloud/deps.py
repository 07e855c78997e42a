# ABOUTME: Dependency container for the Weathercloud operations using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient, the shared Session, and the settings used to build them.

import logging
from http.cookiejar import CookieJar, DefaultCookiePolicy

import httpx
from pydantic import BaseModel, ConfigDict

from weathercloud.config import Settings, load_settings
from weathercloud.session import CredentialStore, JsonCredentialStore, Session

logger = logging.getLogger(__name__)


class WeathercloudDeps(BaseModel):
    """Context passed to every public operation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    session: Session
    settings: Settings = Settings()
    store: CredentialStore | None = None

    def url(self, path: str) -> str:
        return f"{self.settings.base_url}{path}"


def create_http_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create an httpx client with the configured timeout and user agent.

    Redirects are not followed, so the sign-in redirect and its cookies stay visible.
    The client's cookie jar refuses every cookie: the Session is the only cookie source.
    """
    return httpx.AsyncClient(
        timeout=settings.timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=False,
        cookies=CookieJar(policy=DefaultCookiePolicy(allowed_domains=[])),
        transport=transport,
    )


def create_deps(settings: Settings | None = None) -> WeathercloudDeps:
    """Build the operation context, restoring a persisted session when a credentials file is set."""
    settings = settings or load_settings()
    store = JsonCredentialStore(settings.credentials_file) if settings.credentials_file else None
    session = Session()
    if store is not None and session.load(store):
        logger.info("Using persisted session from %s", settings.credentials_file)
    return WeathercloudDeps(
        http_client=create_http_client(settings),
        session=session,
        settings=settings,
        store=store,
    )
