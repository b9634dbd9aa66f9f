# mentor_chat/routers/chat/websocket_router.py
from uuid import UUID
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, Query
from sqlalchemy.ext.asyncio import AsyncSession
import json
import logging

from ...core.database import get_db
from ...core.exceptions import MentorChatException, NotAParticipantError
from ...services.chat.chat_room_service import ChatRoomService
from ...services.chat.websocket_manager import websocket_manager

logger = logging.getLogger(__name__)
router = APIRouter()

async def ensure_participant(db: AsyncSession, user_id: UUID, chat_room_id: UUID):
    """Only the room's mentor and patient may subscribe to it"""
    try:
        chat_room = await ChatRoomService(db).get_room(chat_room_id)
    finally:
        # End the read so the socket does not hold a connection between frames
        await db.rollback()
    if user_id not in (chat_room.mentor_id, chat_room.patient_id):
        raise NotAParticipantError(user_id, chat_room_id)

@router.websocket("/ws/chat")
async def websocket_endpoint(
    websocket: WebSocket,
    user_id: UUID = Query(...),
    db: AsyncSession = Depends(get_db),
):
    """WebSocket endpoint for real-time chat notifications.

    Messages are sent through POST /api/messages; this socket only carries
    room subscriptions, typing indicators and new_message events.
    """
    await websocket_manager.connect(websocket, user_id)

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message_data = json.loads(data)
                message_type = message_data.get("type")

                if message_type == "join_room":
                    chat_room_id = UUID(message_data.get("chat_room_id"))
                    await ensure_participant(db, user_id, chat_room_id)
                    await websocket_manager.join_chat_room(user_id, chat_room_id)

                elif message_type == "leave_room":
                    chat_room_id = UUID(message_data.get("chat_room_id"))
                    await websocket_manager.leave_chat_room(user_id, chat_room_id)

                elif message_type == "typing":
                    chat_room_id = UUID(message_data.get("chat_room_id"))
                    if not websocket_manager.is_in_room(user_id, chat_room_id):
                        await websocket_manager.reply(websocket, {
                            "type": "error",
                            "message": "Join the room before typing in it"
                        }, user_id)
                        continue
                    await websocket_manager.broadcast_to_room({
                        "type": "typing_indicator",
                        "chat_room_id": str(chat_room_id),
                        "user_id": str(user_id),
                        "is_typing": bool(message_data.get("is_typing", False))
                    }, chat_room_id, exclude_user=user_id)

                else:
                    await websocket_manager.reply(websocket, {
                        "type": "error",
                        "message": f"Unknown message type: {message_type}"
                    }, user_id)

            except MentorChatException as e:
                logger.info(f"Rejected websocket frame from {user_id}: {e.message}")
                await websocket_manager.reply(websocket, {
                    "type": "error",
                    "message": e.message
                }, user_id)
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Bad websocket frame from {user_id}: {e}")
                await websocket_manager.reply(websocket, {
                    "type": "error",
                    "message": "Malformed message"
                }, user_id)

    except WebSocketDisconnect:
        websocket_manager.disconnect(user_id, websocket)
        logger.info(f"User {user_id} disconnected from chat")
    except Exception as e:
        logger.error(f"WebSocket error for user {user_id}: {e}")
        websocket_manager.disconnect(user_id, websocket)
