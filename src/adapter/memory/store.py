import threading
from typing import Dict, List
from uuid import UUID

from src.domain.entities import AuditEvent, Identity, PendingAuthentication, RevokedToken


class InMemoryStore:
    """
    Process-wide tables shared by every InMemoryUnitOfWork.

    All reads and writes of shared state happen under one re-entrant lock, so
    compare-and-swap operations are atomic across threads and event loops.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.identities: Dict[UUID, Identity] = {}
        self.pending_authentications: Dict[UUID, PendingAuthentication] = {}
        self.revoked_tokens: Dict[str, RevokedToken] = {}
        self.audit_events: List[AuditEvent] = []

    def clear(self):
        with self.lock:
            self.identities.clear()
            self.pending_authentications.clear()
            self.revoked_tokens.clear()
            self.audit_events.clear()
