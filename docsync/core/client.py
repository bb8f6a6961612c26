"""HTTP client wrapper for the document service API."""

from collections.abc import Callable, Iterable
from typing import IO, Any, TypeVar

import requests

from ..models.documents import RemoteDocument, Tag
from .auth import DocsAuth

T = TypeVar("T")


class DocsAPIError(Exception):
    """Exception raised for document service errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ServiceError(DocsAPIError):
    """Transport failure or HTTP error status."""


class DecodeError(DocsAPIError):
    """Response body is not valid JSON or lacks the expected fields."""


class AuthError(DocsAPIError):
    """Login was refused."""


class UploadError(DocsAPIError):
    """The service answered a file upload with an error payload."""


class DocsClient:
    """HTTP client for the document service REST API with session login."""

    API_APP = "/api/app"
    API_USER_LOGIN = "/api/user/login"
    API_TAG_LIST = "/api/tag/list"
    API_DOCUMENT = "/api/document"
    API_DOCUMENT_LIST = "/api/document/list"
    API_FILE = "/api/file"

    def __init__(
        self,
        auth: DocsAuth | None = None,
        timeout: float = 30.0,
        page_size: int = 100,
    ) -> None:
        """Initialize client with authentication.

        Args:
            auth: DocsAuth instance (creates one from env if not provided)
            timeout: Per-request timeout in seconds
            page_size: Number of documents requested per listing page
        """
        self.auth = auth or DocsAuth()
        self.timeout = timeout
        self.page_size = page_size
        self.session = requests.Session()

    def _send(
        self,
        method: str,
        path: str,
        query_params: dict[str, str] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send a request on the shared session.

        Raises:
            ServiceError: On transport failures
        """
        url = self.auth.get_full_url(path, query_params)

        try:
            return self.session.request(
                method=method,
                url=url,
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ServiceError(f"Request failed: {method} {path}: {e}") from e

    @staticmethod
    def _check_status(response: requests.Response, path: str) -> None:
        if response.status_code >= 400:
            error_msg = f"API error {response.status_code} on {path}: {response.text[:500]}"
            raise ServiceError(error_msg, response.status_code, response)

    @staticmethod
    def _decode(response: requests.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                f"Error parsing json from {path}: {e}", response.status_code, response
            ) from e

    def _request(
        self,
        method: str,
        path: str,
        query_params: dict[str, str] | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a request and return the decoded JSON object.

        Raises:
            ServiceError: On transport failures or error statuses
            DecodeError: If the body is not a JSON object
        """
        response = self._send(method, path, query_params, data)
        self._check_status(response, path)

        # Handle empty responses
        if not response.content:
            return {}

        value = self._decode(response, path)
        if not isinstance(value, dict):
            raise DecodeError(f"Expected a JSON object from {path}", response.status_code, response)
        return value

    def get(
        self,
        path: str,
        query_params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Make a GET request."""
        return self._request("GET", path, query_params)

    def put(self, path: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make a form-encoded PUT request."""
        return self._request("PUT", path, data=data)

    @staticmethod
    def _build(factory: Callable[[dict[str, Any]], T], items: Iterable[Any], path: str) -> list[T]:
        """Build models from listing entries, mapping bad shapes to DecodeError."""
        try:
            return [factory(item) for item in items]
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Unexpected entry in {path}: {e}") from e

    @staticmethod
    def _expect_list(data: dict[str, Any], key: str, path: str) -> list[Any]:
        items = data.get(key)
        if not isinstance(items, list):
            raise DecodeError(f"Missing '{key}' list in response from {path}")
        return items

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def get_version(self) -> str:
        """Fetch the service version; doubles as a reachability check."""
        response = self.get(self.API_APP)
        return str(response.get("current_version", ""))

    def login(self) -> None:
        """Open a session; the login cookie is kept on ``self.session``.

        Raises:
            AuthError: If the service does not answer 200
        """
        response = self._send("POST", self.API_USER_LOGIN, data=self.auth.login_form())
        if response.status_code != 200:
            raise AuthError("Invalid credentials", response.status_code, response)

    # -------------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------------

    def list_tags(self) -> list[Tag]:
        """Fetch the full tag catalog."""
        response = self.get(self.API_TAG_LIST)
        tags = self._expect_list(response, "tags", self.API_TAG_LIST)
        return self._build(Tag.from_dict, tags, self.API_TAG_LIST)

    def list_documents(self) -> list[RemoteDocument]:
        """Fetch every document, following the listing pages.

        Paging stops once ``total`` documents have been read, on an empty
        page, or after the first page when the service reports no total.
        """
        documents: list[RemoteDocument] = []
        offset = 0

        while True:
            response = self.get(
                self.API_DOCUMENT_LIST,
                {"offset": str(offset), "limit": str(self.page_size)},
            )
            page = self._expect_list(response, "documents", self.API_DOCUMENT_LIST)
            documents.extend(self._build(RemoteDocument.from_dict, page, self.API_DOCUMENT_LIST))
            offset += len(page)

            total = response.get("total")
            if total is None or not page:
                break
            try:
                if offset >= int(total):
                    break
            except (TypeError, ValueError) as e:
                raise DecodeError(f"Invalid total in response from {self.API_DOCUMENT_LIST}: {e}") from e

        return documents

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_document(self, title: str, language: str, tag_ids: Iterable[str]) -> str:
        """Create a document and return its id.

        ``tags`` is sent as a repeated form field, one value per tag id.
        """
        response = self.put(
            self.API_DOCUMENT,
            data={"title": title, "language": language, "tags": list(tag_ids)},
        )
        document_id = response.get("id")
        if not document_id:
            raise DecodeError(f"No document id in response from {self.API_DOCUMENT}")
        return str(document_id)

    def delete_document(self, document_id: str) -> None:
        """Delete a document by id."""
        path = f"{self.API_DOCUMENT}/{document_id}"
        response = self._send("DELETE", path)
        self._check_status(response, path)

    def upload_file(self, document_id: str, filename: str, fileobj: IO[bytes]) -> str:
        """Attach file content to a document.

        Args:
            document_id: Target document
            filename: Name sent with the multipart file part
            fileobj: Open binary file; the caller owns and closes it

        Returns:
            Upload status reported by the service

        Raises:
            UploadError: If the payload carries an error ``type``
        """
        response = self._send(
            "PUT",
            self.API_FILE,
            data={"id": document_id},
            files={"file": (filename, fileobj)},
        )
        payload = self._decode(response, self.API_FILE)
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected a JSON object from {self.API_FILE}", response.status_code, response)

        if payload.get("type"):
            detail = payload.get("message") or payload["type"]
            raise UploadError(f"Error uploading file: {detail}", response.status_code, response)

        self._check_status(response, self.API_FILE)
        return str(payload.get("status", ""))

    # -------------------------------------------------------------------------
    # Health Check
    # -------------------------------------------------------------------------

    def verify_connection(self) -> bool:
        """Verify reachability and credentials.

        Returns:
            True if the service answered and accepted the login

        Raises:
            DocsAPIError: On connection or auth failure
        """
        self.get_version()
        self.login()
        return True
