"""
Live subscription websockets.

Each connection owns one subscription. Every state change (loading, data,
error) is pushed to the client as a JSON frame:

    {"type": "snapshot", "path": ..., "data": ..., "loading": ..., "error": ...}

Browsers cannot set headers on websockets, so the bearer token is passed as
the ``token`` query parameter.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from fastapi.encoders import jsonable_encoder

from app.config import Settings, get_settings
from app.crud.base import StoreContext
from app.dependencies import get_admin_directory, get_optional_user, get_store
from app.store.policy import AdminDirectory, AuthContext
from app.store.queries import ASCENDING, DESCENDING, DocumentDescriptor, QueryDescriptor
from app.store.subscriptions import CollectionSubscription, DocumentSubscription
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


async def _resolve_user(token: Optional[str], settings: Settings, admins: AdminDirectory) -> AuthContext:
    authorization = f"Bearer {token}" if token else None
    return await get_optional_user(authorization, settings, admins)


async def _stream(websocket: WebSocket, subscription_cls, store: StoreContext, user: AuthContext, target) -> None:
    """Subscribe to ``target`` and forward every state change until the client goes away."""
    loop = asyncio.get_running_loop()
    frames: asyncio.Queue = asyncio.Queue()

    def on_change(sub) -> None:
        frame = {"type": "snapshot", "path": target.path, **sub.snapshot()}
        loop.call_soon_threadsafe(frames.put_nowait, frame)

    async def sender() -> None:
        while True:
            frame = await frames.get()
            await websocket.send_json(jsonable_encoder(frame))

    subscription = subscription_cls(store.db, store.bus, store.policy, auth=user, on_change=on_change)
    send_task = asyncio.create_task(sender())
    try:
        subscription.watch(target)
        while True:
            # Client messages are ignored; receiving detects the disconnect.
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug(f"Live client disconnected from {target.path}")
    finally:
        subscription.close()
        send_task.cancel()


@router.websocket("/doc/{path:path}")
async def live_document(
    websocket: WebSocket,
    path: str,
    token: Optional[str] = Query(None),
    store: StoreContext = Depends(get_store),
    settings: Settings = Depends(get_settings),
    admins: AdminDirectory = Depends(get_admin_directory),
) -> None:
    """Stream a single document; ``data`` is null while it does not exist."""
    await websocket.accept()
    try:
        target = DocumentDescriptor(path)
    except ValueError as exc:
        await websocket.close(code=1008, reason=str(exc))
        return

    user = await _resolve_user(token, settings, admins)
    await _stream(websocket, DocumentSubscription, store, user, target)


@router.websocket("/{path:path}")
async def live_collection(
    websocket: WebSocket,
    path: str,
    token: Optional[str] = Query(None),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    descending: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1),
    store: StoreContext = Depends(get_store),
    settings: Settings = Depends(get_settings),
    admins: AdminDirectory = Depends(get_admin_directory),
) -> None:
    """Stream the documents of a collection, each with its ``id``."""
    await websocket.accept()
    try:
        target = QueryDescriptor.collection(path)
        if order_by:
            target = target.order_by(order_by, DESCENDING if descending else ASCENDING)
        if limit:
            target = target.limited(limit)
    except ValueError as exc:
        await websocket.close(code=1008, reason=str(exc))
        return

    user = await _resolve_user(token, settings, admins)
    await _stream(websocket, CollectionSubscription, store, user, target)
