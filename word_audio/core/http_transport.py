"""HTTP transport for audio downloads"""

from collections.abc import Callable

import requests  # type: ignore[import-untyped]
from requests.adapters import HTTPAdapter  # type: ignore[import-untyped]
from urllib3.util import Retry

from ..exceptions import TransportError
from ..logging_config import get_logger
from ..models.result_models import HttpResponse
from .constants import AudioConstants
from .interfaces import TransportInterface

logger = get_logger(__name__)


class RequestsTransport(TransportInterface):
    """GET over a shared requests session that returns every status code.

    Retries are off by default: a failed word is simply picked up by the
    next sync run.
    """

    def __init__(
        self,
        timeout: int | Callable[[], int] = 10,
        max_retries: int = 0,
        session: requests.Session | None = None,
    ):
        self._timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": AudioConstants.AUDIO_USER_AGENT})
        self._configure_retries(max_retries)

    def _configure_retries(self, max_retries: int) -> None:
        retry = Retry(
            total=max_retries,
            backoff_factor=0.3,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def timeout(self) -> int:
        return self._timeout() if callable(self._timeout) else self._timeout

    def get(self, url: str) -> HttpResponse:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Network error requesting {url}: {e}")
            raise TransportError(url, e) from e
        logger.debug(f"Response status for {url}: {response.status_code}")
        return HttpResponse(status=response.status_code, content=response.content)
