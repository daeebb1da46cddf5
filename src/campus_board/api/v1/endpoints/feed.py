# src/campus_board/api/v1/endpoints/feed.py
"""Realtime feed stream over WebSocket."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Query, WebSocket, status

from campus_board.api.v1.dependencies import HubDep, SessionFactoryDep
from campus_board.core.errors import BoardError, Unauthorized
from campus_board.core.security import decode_access_token
from campus_board.db.time import now_ms
from campus_board.models.enums import RankingMode
from campus_board.repositories import PostRepository
from campus_board.schemas.post import PostResponse
from campus_board.services.board_state import BoardState
from campus_board.services.feed import CategorySelection, parse_category_selection
from campus_board.services.realtime import Snapshot, queue_listener

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feed", tags=["feed"])


async def _send_feed(
    websocket: WebSocket,
    state: BoardState,
    selection: CategorySelection,
    sort: RankingMode,
    viewer_id: str | None,
) -> None:
    now = now_ms()
    posts = [
        PostResponse.from_record(post, now=now, viewer_id=viewer_id).model_dump(mode="json")
        for post in state.feed(selection, sort, now)
    ]
    await websocket.send_json({"type": "feed", "sort": sort.value, "posts": posts})


@router.websocket("/stream")
async def stream_feed(
    websocket: WebSocket,
    session_factory: SessionFactoryDep,
    hub: HubDep,
    categories: str | None = Query(None),
    sort: RankingMode = Query(RankingMode.NEWEST),
    token: str | None = Query(None),
) -> None:
    """Push the composed feed on connect and after every store write.

    Each connection keeps its own :class:`BoardState`. A new snapshot replaces
    it whole and the feed is recomputed; any text message from the client
    asks for a recompute against the current clock, which is how a client
    drops posts that expired without a write happening.

    The initial load uses a short-lived session, so an open socket holds no
    database connection.
    """
    viewer_id: str | None = None
    if token:
        try:
            viewer_id = str(decode_access_token(token)["sub"])
        except Unauthorized:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

    await websocket.accept()
    selection = parse_category_selection(categories)
    queue: asyncio.Queue[Snapshot] = asyncio.Queue(maxsize=1)
    unsubscribe = hub.subscribe(queue_listener(asyncio.get_running_loop(), queue))
    state = BoardState()
    receiver: asyncio.Task[dict] | None = None
    getter: asyncio.Task[Snapshot] | None = None
    try:
        try:
            with session_factory() as db:
                state.replace(PostRepository(db).list_all())
        except BoardError as exc:
            logger.warning("Feed stream could not load posts: %s", exc)
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
            return
        await _send_feed(websocket, state, selection, sort, viewer_id)

        receiver = asyncio.create_task(websocket.receive())
        while True:
            getter = asyncio.create_task(queue.get())
            done, _ = await asyncio.wait(
                {receiver, getter}, return_when=asyncio.FIRST_COMPLETED
            )
            if getter in done:
                state.replace(getter.result())
            else:
                getter.cancel()
            if receiver in done:
                message = receiver.result()
                if message["type"] == "websocket.disconnect":
                    break
                receiver = asyncio.create_task(websocket.receive())
            await _send_feed(websocket, state, selection, sort, viewer_id)
    finally:
        unsubscribe()
        for task in (receiver, getter):
            if task is not None and not task.done():
                task.cancel()
