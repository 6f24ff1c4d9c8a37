"""
In-memory certificate store adapter.

Implements the CertificateStore port with a plain list guarded by a single
threading.Lock. Every operation, reads included, holds the lock for its whole
duration; `with` releases it on every exit path.

Identifier assignment happens under the same lock as the append, for single
creates and batch imports alike, so concurrent writers never share an id.
Lookups are linear scans over the insertion-ordered list.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import replace

import structlog
from railway import ErrorCode
from railway.result import Result

from certificate_service.domain.models import Certificate

log = structlog.get_logger()

NOT_FOUND_MESSAGE = "Certificate not found"


class InMemoryCertificateStore:
    """
    Process-lifetime certificate collection.

    Constructed once by the composition root and handed to the HTTP layer.
    """

    def __init__(self, certificates: Sequence[Certificate] = ()) -> None:
        self._certificates: list[Certificate] = list(certificates)
        self._lock = threading.Lock()

    def get(self, certificate_id: int) -> Result[Certificate]:
        with self._lock:
            index = self._index_of(certificate_id)
            found = self._certificates[index] if index is not None else None
        return Result.from_optional(found, NOT_FOUND_MESSAGE, ErrorCode.NOT_FOUND)

    def create(self, certificate: Certificate) -> Result[Certificate]:
        with self._lock:
            stored = replace(certificate, id=len(self._certificates) + 1)
            self._certificates.append(stored)
        log.info("store.created", certificate_id=stored.id, name=stored.name)
        return Result.success(stored)

    def list_all(self) -> Result[list[Certificate]]:
        with self._lock:
            return Result.success(list(self._certificates))

    def update(self, certificate_id: int, replacement: Certificate) -> Result[Certificate]:
        """Replace every field of the stored certificate; the id stays `certificate_id`."""
        with self._lock:
            index = self._index_of(certificate_id)
            if index is None:
                return Result.failure(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE)
            updated = replace(replacement, id=certificate_id)
            self._certificates[index] = updated
        log.info("store.updated", certificate_id=certificate_id)
        return Result.success(updated)

    def append_batch(self, certificates: Sequence[Certificate]) -> Result[list[Certificate]]:
        """
        Append all certificates in order under one lock acquisition.

        Ids continue from the size of the store at the moment the lock is
        taken, so the batch occupies a contiguous id range.
        """
        with self._lock:
            base = len(self._certificates)
            stored = [
                replace(cert, id=base + offset)
                for offset, cert in enumerate(certificates, start=1)
            ]
            self._certificates.extend(stored)
        log.info(
            "store.batch_appended",
            count=len(stored),
            first_id=stored[0].id if stored else None,
        )
        return Result.success(stored)

    def count(self) -> int:
        with self._lock:
            return len(self._certificates)

    def _index_of(self, certificate_id: int) -> int | None:
        """Position of the certificate with this id; caller holds the lock."""
        for index, cert in enumerate(self._certificates):
            if cert.id == certificate_id:
                return index
        return None
