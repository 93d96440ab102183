# api/schemas/chat.py
from typing import List, Optional
from .common import CamelModel

class Message(CamelModel):
    text: str
    sender_display_handle: str
    timestamp_iso8601: str

class MessageCreate(CamelModel):
    text: str

class LikeResponse(CamelModel):
    chat_room_id: int
    owner_display_handle: str
    messages: List[Message]

class ChatRoomSummary(CamelModel):
    chat_room_id: int
    book_id: int
    partner_id: int
    partner_display_handle: str
    last_message: Optional[Message] = None
