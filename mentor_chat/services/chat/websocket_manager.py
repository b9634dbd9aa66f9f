# mentor_chat/services/chat/websocket_manager.py
from typing import Dict, List, Optional, Set
from uuid import UUID
from fastapi import WebSocket
import json
import logging

from .delivery import DeliveryChannel

logger = logging.getLogger(__name__)

class WebSocketManager(DeliveryChannel):
    def __init__(self):
        # Store active connections: {user_id: [websockets]}, one per open tab
        self.active_connections: Dict[str, List[WebSocket]] = {}
        # Store chat room subscriptions: {chat_room_id: {user_ids}}
        self.room_subscriptions: Dict[str, Set[str]] = {}

    async def connect(self, websocket: WebSocket, user_id: UUID):
        """Accept websocket connection and store user info"""
        await websocket.accept()
        user_key = str(user_id)

        sockets = self.active_connections.setdefault(user_key, [])
        sockets.append(websocket)
        logger.info(f"User {user_key} connected ({len(sockets)} open)")

        await self.reply(websocket, {
            "type": "connection_status",
            "status": "connected",
            "user_id": user_key,
        }, user_id)

    def disconnect(self, user_id: UUID, websocket: Optional[WebSocket] = None):
        """Remove one socket of a user, or all of them when none is given.

        Room subscriptions are dropped once the user's last socket is gone.
        """
        user_key = str(user_id)
        sockets = self.active_connections.get(user_key)
        if sockets is None:
            return

        if websocket is not None:
            # Starlette websockets are unhashable, match by identity
            sockets[:] = [ws for ws in sockets if ws is not websocket]
            if sockets:
                logger.info(f"User {user_key} closed a socket ({len(sockets)} still open)")
                return

        for subscribers in self.room_subscriptions.values():
            subscribers.discard(user_key)

        # Clean up empty rooms
        self.room_subscriptions = {
            room_id: subscribers
            for room_id, subscribers in self.room_subscriptions.items()
            if subscribers
        }

        del self.active_connections[user_key]
        logger.info(f"User {user_key} disconnected")

    async def join_chat_room(self, user_id: UUID, chat_room_id: UUID):
        """Subscribe user to a chat room"""
        user_key = str(user_id)
        room_key = str(chat_room_id)

        if user_key not in self.active_connections:
            logger.warning(f"User {user_key} not connected, cannot join room {room_key}")
            return

        self.room_subscriptions.setdefault(room_key, set()).add(user_key)
        logger.info(f"User {user_key} joined room {room_key}")

        await self.send_personal_message({
            "type": "room_joined",
            "chat_room_id": room_key
        }, user_id)

    async def leave_chat_room(self, user_id: UUID, chat_room_id: UUID):
        """Unsubscribe user from a chat room"""
        user_key = str(user_id)
        room_key = str(chat_room_id)

        if room_key in self.room_subscriptions:
            self.room_subscriptions[room_key].discard(user_key)

            if not self.room_subscriptions[room_key]:
                del self.room_subscriptions[room_key]

    def is_in_room(self, user_id: UUID, chat_room_id: UUID) -> bool:
        return str(user_id) in self.room_subscriptions.get(str(chat_room_id), set())

    async def reply(self, websocket: WebSocket, message: dict, user_id: UUID) -> bool:
        """Send a frame to one socket only; a broken socket is dropped"""
        try:
            await websocket.send_text(json.dumps(message, default=str))
            return True
        except Exception as e:
            logger.error(f"Error sending message to {user_id}: {e}")
            self.disconnect(user_id, websocket)
            return False

    async def send_personal_message(self, message: dict, user_id: UUID) -> int:
        """Send message to every open socket of a user"""
        sent_count = 0
        for websocket in list(self.active_connections.get(str(user_id), ())):
            if await self.reply(websocket, message, user_id):
                sent_count += 1
        return sent_count

    async def broadcast_to_room(self, message: dict, chat_room_id: UUID, exclude_user: Optional[UUID] = None) -> int:
        """Send message to all users in a chat room, returns the number of sockets reached"""
        room_key = str(chat_room_id)
        exclude_key = str(exclude_user) if exclude_user else None

        subscribers = self.room_subscriptions.get(room_key)
        if not subscribers:
            logger.debug(f"Room {room_key} has no subscriptions")
            return 0

        sent_count = 0
        for user_key in list(subscribers):
            if user_key == exclude_key:
                continue
            sent_count += await self.send_personal_message(message, UUID(user_key))

        logger.debug(f"Broadcast to room {room_key}: sent to {sent_count} sockets")
        return sent_count

    async def notify(self, chat_room_id: UUID, payload: dict) -> None:
        await self.broadcast_to_room(payload, chat_room_id)

    def get_online_users_in_room(self, chat_room_id: UUID) -> List[str]:
        """Get list of online users in a chat room"""
        room_key = str(chat_room_id)

        return [
            user_key for user_key in self.room_subscriptions.get(room_key, set())
            if user_key in self.active_connections
        ]

    def is_user_online(self, user_id: UUID) -> bool:
        """Check if user is online"""
        return str(user_id) in self.active_connections

# Global WebSocket manager instance
websocket_manager = WebSocketManager()
