# _*_ coding: utf-8 _*_
"""Alert stream websocket endpoint."""
import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
from galaxy_api.api.services.auth_service import decode_access_token
from galaxy_api.config import settings
from galaxy_api.types.response.exceptions import HandledException

logger = logging.getLogger(__name__)
router = APIRouter(tags=["alertstream"])


@router.websocket("/alertstream")
async def alert_stream(websocket: WebSocket, token: str = Query(default="")):
    """
    알림 스트림 웹소켓

    HTTP 미들웨어를 거치지 않으므로 쿼리 문자열의 토큰을 직접 검증한다.
    연결되면 안내 메시지를 보내고, 받은 메시지를 그대로 돌려보낸다.
    """
    if settings.jwt_enabled:
        try:
            payload = decode_access_token(token)
        except HandledException as e:
            logger.warning(f"알림 스트림 연결 거부: {e}")
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return
        user_id = payload.get("sub")
    else:
        user_id = None

    await websocket.accept()
    logger.info(f"알림 스트림 연결: user_id={user_id}")
    await websocket.send_text(settings.alertstream_greeting)

    try:
        while True:
            message = await websocket.receive_text()
            await websocket.send_text(message)
    except WebSocketDisconnect:
        logger.info(f"알림 스트림 연결 종료: user_id={user_id}")
