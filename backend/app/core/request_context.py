"""Request Context — per-request identity shared by the pipeline stages.

Invariants:
    - request_id is bound once, by the request logging stage; a second bind
      raises RuntimeError (a wiring fault, mapped to 500)
    - user_id/user_role are bound once, by the authentication stage
    - resolved_request_id is "Unknown" until the logging stage has run
    - current_request_id mirrors request_id for log records emitted below the
      logging stage (handlers, repository)
"""

from contextvars import ContextVar
from dataclasses import dataclass

from app.core.credentials import TokenIdentity

UNKNOWN_REQUEST_ID = "Unknown"

current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None,
)


@dataclass
class RequestContext:
    request_id: str | None = None
    user_id: str | None = None
    user_role: str | None = None

    @property
    def resolved_request_id(self) -> str:
        return self.request_id or UNKNOWN_REQUEST_ID

    def bind_request_id(self, request_id: str) -> None:
        if self.request_id is not None:
            raise RuntimeError(
                f"Request id already bound ({self.request_id})",
            )
        self.request_id = request_id

    def bind_identity(self, identity: TokenIdentity) -> None:
        if self.user_id is not None:
            raise RuntimeError(
                f"Identity already bound ({self.user_id})",
            )
        self.user_id = identity.user_id
        self.user_role = identity.role.value
