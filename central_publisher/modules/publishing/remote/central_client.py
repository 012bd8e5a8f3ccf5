"""HTTP client for the Sonatype Central Portal publisher API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import httpx

from central_publisher.modules.publishing.domain import (
    Coordinate,
    Credentials,
    DeploymentReceipt,
    ErrorEnvelope,
    FilesystemError,
    NetworkError,
    PortalResponse,
    PreconditionError,
    PublishingType,
    RemoteCallError,
)
from central_publisher.modules.publishing.domain.constants import BUNDLE_CONTENT_TYPE, BUNDLE_FILE_NAME, BUNDLE_PART_NAME
from central_publisher.settings import Settings

REDACTED = "<redacted>"


class CentralPortalClient:
    """Upload bundles and query or drop deployments on the Central Portal."""

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        self.upload_url = settings.upload_url
        self.status_url = settings.status_url
        self.deployment_url = settings.deployment_url
        self.log = logging.getLogger(self.__class__.__name__)
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=settings.http_timeout, verify=True)

    # ------------------------------------------------------------------ operations
    def upload(
        self,
        coordinate: Coordinate,
        publishing_type: PublishingType | str,
        archive_path: Path,
        credentials: Credentials,
    ) -> DeploymentReceipt:
        credentials.validate()
        coordinate.validate()
        if not isinstance(publishing_type, PublishingType):
            publishing_type = PublishingType.parse(publishing_type)
        archive_path = Path(archive_path)
        if not archive_path.is_file():
            raise FilesystemError(f"bundle archive does not exist: {archive_path}")

        name = quote(coordinate.deployment_name, safe="")
        url = f"{self.upload_url}?publishingType={publishing_type.value}&name={name}"
        self.log.info(
            "Uploading bundle %s for %s publishingType=%s",
            archive_path,
            coordinate.deployment_name,
            publishing_type.value,
        )
        with open(archive_path, "rb") as fh:
            files = {BUNDLE_PART_NAME: (BUNDLE_FILE_NAME, fh, BUNDLE_CONTENT_TYPE)}
            response = self._send("upload", "POST", url, credentials, files=files)
        receipt = DeploymentReceipt.from_response(response)
        self.log.info("Deployment Response: %s", response.pretty())
        self.log.info("Deployment created deploymentId=%s", receipt.deployment_id)
        return receipt

    def get_status(self, deployment_id: str, credentials: Credentials) -> PortalResponse:
        credentials.validate()
        deployment_id = self._require_deployment_id(deployment_id)
        self.log.info("Fetching deployment status deploymentId=%s", deployment_id)
        response = self._send(
            "status",
            "POST",
            self.status_url,
            credentials,
            params={"id": deployment_id},
            content=b"",
            headers={"Content-Type": "application/json"},
        )
        self.log.info("Deployment Response:\n%s", response.pretty())
        return response

    def drop_deployment(self, deployment_id: str, credentials: Credentials) -> PortalResponse:
        credentials.validate()
        deployment_id = self._require_deployment_id(deployment_id)
        self.log.info("Dropping deployment deploymentId=%s", deployment_id)
        response = self._send(
            "drop",
            "DELETE",
            f"{self.deployment_url}/{quote(deployment_id, safe='')}",
            credentials,
        )
        self.log.info("Deployment dropped successfully deploymentId=%s", deployment_id)
        return response

    # ------------------------------------------------------------------ plumbing
    def _send(self, operation: str, method: str, url: str, credentials: Credentials, **kwargs) -> PortalResponse:
        headers = dict(kwargs.pop("headers", None) or {})
        headers["Authorization"] = credentials.authorization_header
        try:
            resp = self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            self.log.error("%s request to %s failed: %s", operation, url, exc)
            raise NetworkError(operation, str(exc) or exc.__class__.__name__) from exc
        if self.settings.http_log_headers:
            self._log_exchange(resp)
        text = resp.text
        if not resp.is_success:
            envelope = ErrorEnvelope.from_body(text)
            self.log.error(
                "%s rejected by portal (status=%s): %s",
                operation,
                resp.status_code,
                envelope.error.message,
            )
            raise RemoteCallError(operation, resp.status_code, envelope)
        return PortalResponse.from_text(resp.status_code, text)

    @staticmethod
    def _require_deployment_id(deployment_id: str) -> str:
        value = (deployment_id or "").strip()
        if not value:
            raise PreconditionError("deploymentId must not be empty")
        return value

    def _log_exchange(self, response: httpx.Response) -> None:
        request = response.request
        self.log.debug("--> %s %s", request.method, request.url)
        for key, value in request.headers.items():
            shown = REDACTED if key.lower() == "authorization" else value
            self.log.debug("%s: %s", key, shown)
        self.log.debug("<-- %s %s", response.status_code, request.url)
        for key, value in response.headers.items():
            self.log.debug("%s: %s", key, value)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "CentralPortalClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
