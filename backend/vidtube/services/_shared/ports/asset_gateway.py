from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from vidtube.services._shared.errors import UploadError


@dataclass(frozen=True, slots=True)
class UploadResult:
    """
    Reference to a stored asset.

    :param public_id: Stable identifier used for later deletion.
    :type public_id: str
    :param url: Retrievable URL of the asset.
    :type url: str
    """

    public_id: str
    url: str


class AssetGateway(Protocol):
    """Durable storage for uploaded media files."""

    def upload(self, local_path: str) -> UploadResult:
        """
        Push a local file to storage. The local file is removed afterwards,
        whether or not the upload succeeded.

        :raises UploadError: When storage rejects or cannot be reached.
        """
        ...

    def delete(self, public_id: str) -> bool:
        """Remove a stored asset. :returns: ``True`` when it existed."""
        ...


@dataclass
class InMemoryAssetGateway(AssetGateway):
    """Process-local gateway for tests and local development.

    ``fail_uploads`` makes every upload raise :class:`UploadError`; paths
    listed in ``failing_paths`` fail individually.
    """

    base_url: str = "memory://assets"
    fail_uploads: bool = False
    failing_paths: set[str] = field(default_factory=set)
    stored: dict[str, str] = field(default_factory=dict)
    uploads: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    def upload(self, local_path: str) -> UploadResult:
        try:
            if self.fail_uploads or local_path in self.failing_paths:
                raise UploadError("Failed to upload file")
            if not os.path.isfile(local_path):
                raise UploadError(f"File not found: {os.path.basename(local_path)}")
            public_id = uuid4().hex
            url = f"{self.base_url}/{public_id}/{os.path.basename(local_path)}"
            self.stored[public_id] = url
            self.uploads.append(local_path)
            return UploadResult(public_id=public_id, url=url)
        finally:
            if os.path.isfile(local_path):
                os.remove(local_path)

    def delete(self, public_id: str) -> bool:
        self.deleted.append(public_id)
        return self.stored.pop(public_id, None) is not None
