# shophub/services/api_client.py
import requests
from requests import RequestException

from shophub.domain.errors import MalformedResponseError, NetworkError, ServerError
from shophub.utils.retry import http_retry
from shophub.utils.settings import API_BASE_URL, API_TIMEOUT_SECONDS, HTTP_ATTEMPTS
from shophub.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class ApiClient:
    """
    Jedna instancja = jedna sesja HTTP do backendu produktow.
    base_url i timeout wstrzykiwane, cookies sesji leca z kazdym requestem.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        attempts: int | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = timeout or API_TIMEOUT_SECONDS
        self.attempts = attempts or HTTP_ATTEMPTS

        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        #wspoldzielona sesja - hook tylko raz
        if self._log_response not in self.session.hooks["response"]:
            self.session.hooks["response"].append(self._log_response)

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get_json(self, path: str):
        #tylko odczyty ida przez retry
        return http_retry(self.attempts)(self._request)("GET", path)

    def send_form(self, method: str, path: str, data: dict, files: dict | None = None):
        return self._request(method, path, data=data, files=files)

    def delete(self, path: str):
        return self._request("DELETE", path)

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, **kwargs):
        url = self.url(path)
        logger.info(f"ApiClient {method} {url}")

        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            logger.error(f"Timeout on {method} {url}: {e}")
            raise NetworkError("Request timeout. Server took too long to respond.") from e
        except requests.ConnectionError as e:
            logger.error(f"Connection refused on {method} {url}: {e}")
            raise NetworkError(
                f"Cannot connect to server. Please ensure the server is running at {self.base_url}"
            ) from e
        except RequestException as e:
            logger.error(f"Request failed on {method} {url}: {e}")
            raise NetworkError("Network error. Please check your connection and server status.") from e

        if resp.status_code >= 400:
            message = self._error_message(resp)
            logger.error(f"API error {resp.status_code} on {method} {url}: {message}")
            raise ServerError(message, status_code=resp.status_code)

        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON in response from {url}") from e

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            for key in ("message", "detail", "error"):
                if isinstance(body.get(key), str) and body[key]:
                    return body[key]

        return f"Request failed with status code {resp.status_code}"

    @staticmethod
    def _log_response(resp: requests.Response, *args, **kwargs):
        logger.info(f"Response from {resp.url}: status {resp.status_code}")
