"""HTTP webhook sink.

This module provides a Sink that starts the downstream workflow by
POSTing the submission document to an HTTP endpoint.
"""

import logging

import httpx

from ...core.errors import SubmissionError
from ...sinks.base import Sink
from ...submission import FilesetDescriptor

logger = logging.getLogger(__name__)

# Response fields that may carry the execution identifier, in order of preference
ID_FIELDS = ("execution_id", "executionArn", "id")


class HttpSink(Sink):
    """Sink that POSTs submission documents as JSON.

    The submission id is taken from the JSON response body
    (``execution_id``, ``executionArn`` or ``id``), falling back to the
    ``Location`` header and finally to the HTTP status line.

    Example:
        >>> sink = HttpSink('https://workflow.example/api/filesets', token='secret')
        >>> sink.submit(descriptor)
        'exec-42'
    """

    name = "http"

    def __init__(
        self,
        endpoint: str,
        token: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        """Initialize the sink.

        Args:
            endpoint: URL the documents are POSTed to
            token: Optional bearer token sent in the Authorization header
            timeout: Request timeout in seconds
            client: Pre-configured httpx client (the sink then does not own it)

        Raises:
            ValueError: If endpoint is empty or not an http(s) URL
        """
        if not endpoint:
            raise ValueError("The http sink needs an endpoint URL")

        try:
            url = httpx.URL(endpoint)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid endpoint URL {endpoint!r}: {e}") from e
        if url.scheme not in ("http", "https"):
            raise ValueError(f"Invalid endpoint scheme: {url.scheme!r}. Only http and https are allowed.")

        self.endpoint = endpoint
        self._owns_client = client is None
        headers = {"Authorization": f"Bearer {token}"} if token else None
        self._client = client or httpx.Client(timeout=timeout, headers=headers)

    def submit(self, descriptor: FilesetDescriptor) -> str:
        try:
            response = self._client.post(self.endpoint, json=descriptor.to_document())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SubmissionError(
                f"Workflow endpoint rejected fileset {descriptor.entry_point}: "
                f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise SubmissionError(f"Cannot reach workflow endpoint {self.endpoint}: {e}") from e

        return self._submission_id(response)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @staticmethod
    def _submission_id(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            for key in ID_FIELDS:
                if body.get(key):
                    return str(body[key])

        location = response.headers.get("Location")
        if location:
            return location

        logger.debug("No execution id in response from %s", response.url)
        return f"http-{response.status_code}"
