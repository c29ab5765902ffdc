"""
HTTP client utilities for modelboard.

Provides a clean interface for making HTTP requests to the model store API,
including SSL context handling, JSON serialization and the shared cookie jar
that carries the ambient session credentials on every request.
"""

import json
import ssl
from http.cookiejar import Cookie, CookieJar
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse
from urllib.request import HTTPCookieProcessor, HTTPSHandler, Request, build_opener


class ModelStoreHttpClient:
    """HTTP client for communicating with the model store API."""

    def __init__(
        self,
        server_base: str,
        timeout: int = 10,
        verify_tls: bool = True,
        session_cookie: Optional[str] = None
    ):
        """
        Initialize HTTP client.

        Args:
            server_base: Base URL of the model store (e.g., http://localhost:3000)
            timeout: Request timeout in seconds
            verify_tls: Verify server certificates for HTTPS URLs
            session_cookie: Optional "name=value" session cookie to seed the jar with
        """
        self.server_base = server_base.rstrip("/")
        self.timeout = timeout
        self.cookies = CookieJar()
        if session_cookie:
            self._seed_cookie(session_cookie)
        self._ssl_context = self._create_ssl_context(verify_tls)
        self._opener = build_opener(
            HTTPCookieProcessor(self.cookies),
            HTTPSHandler(context=self._ssl_context)
        )

    def _create_ssl_context(self, verify_tls: bool) -> ssl.SSLContext:
        """Create SSL context for HTTPS, optionally trusting any certificate."""
        ssl_context = ssl.create_default_context()
        if not verify_tls:
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        return ssl_context

    def _seed_cookie(self, session_cookie: str) -> None:
        name, _, value = session_cookie.strip().partition("=")
        if not name or not value:
            raise ValueError(f"session cookie must look like name=value, got {session_cookie!r}")
        host = urlparse(self.server_base).hostname or ""
        self.cookies.set_cookie(Cookie(
            version=0, name=name, value=value,
            port=None, port_specified=False,
            domain=host, domain_specified=False, domain_initial_dot=False,
            path="/", path_specified=True,
            secure=False, expires=None, discard=True,
            comment=None, comment_url=None, rest={}
        ))

    def _request(self, method: str, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and decode the JSON response body.

        Raises:
            HTTPError: On non-2xx responses
            URLError: On connection errors
            ValueError: On undecodable response bodies
        """
        url = f"{self.server_base}{endpoint}"
        headers = {"Accept": "application/json"}
        body = None
        if data is not None:
            body = json.dumps(data).encode("utf-8")
            headers["Content-Type"] = "application/json"
        req = Request(url, data=body, headers=headers, method=method)

        with self._opener.open(req, timeout=self.timeout) as resp:
            raw = resp.read().decode("utf-8")
            return json.loads(raw) if raw else {}

    def get_json(self, endpoint: str) -> Any:
        return self._request("GET", endpoint)

    def post_json(self, endpoint: str, data: Dict[str, Any]) -> Any:
        return self._request("POST", endpoint, data)

    def put_json(self, endpoint: str, data: Dict[str, Any]) -> Any:
        return self._request("PUT", endpoint, data)

    def delete(self, endpoint: str) -> Any:
        return self._request("DELETE", endpoint)

    def list_models(self) -> List[Dict[str, Any]]:
        """
        Fetch every model record.

        Returns:
            List of record dictionaries in server order

        Raises:
            ValueError: If the server did not answer with a JSON array
        """
        data = self.get_json("/models")
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array from /models, got {type(data).__name__}")
        return data

    def create_model(self, draft: Dict[str, Any]) -> Any:
        return self.post_json("/models", draft)

    def update_model(self, model_id: Union[int, str], draft: Dict[str, Any]) -> Any:
        return self.put_json(f"/models/{model_id}", draft)

    def delete_model(self, model_id: Union[int, str]) -> Any:
        return self.delete(f"/models/{model_id}")
