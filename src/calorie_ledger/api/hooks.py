"""Change-notification hook guarded by a shared token."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from calorie_ledger.api.models import ChangeNotification  # noqa: TC001
from calorie_ledger.api.serializers import serialize_report

if TYPE_CHECKING:
    from calorie_ledger.containers import AppContainer

router = APIRouter(prefix="/api/hooks", tags=["hooks"])


def _get_hook_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.hook_token


async def require_hook_token(
    x_hook_token: str | None = Header(default=None),
    hook_token: str = Depends(_get_hook_token),
) -> None:
    """Ensure requests include the configured hook token."""
    if not x_hook_token or x_hook_token != hook_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/change", dependencies=[Depends(require_hook_token)])
async def change(
    notification: ChangeNotification, request: Request
) -> dict[str, object]:
    """Classify a change notification and run the matching recomputation."""
    container: AppContainer = request.app.state.container
    orchestrator = container.orchestrator
    signal = orchestrator.classify_change(
        notification.collection, notification.fields
    )
    report = orchestrator.handle(signal)
    return serialize_report(report)
