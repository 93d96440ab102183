# api/routes/chatrooms.py

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bookshare.auth import Identity
from bookshare.services.chat import ChatService
from api.dependencies import get_db, get_current_identity
from api.schemas.chat import ChatRoomSummary, Message, MessageCreate

router = APIRouter(prefix="/chatrooms", tags=["chatrooms"])

@router.get("", response_model=List[ChatRoomSummary])
def get_chat_rooms(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """List the caller's chat rooms, one per chat partner."""
    rooms = ChatService(db).list_chat_rooms(identity.user_id)
    return [ChatRoomSummary.model_validate(room) for room in rooms]

@router.get("/{chat_room_id}/messages", response_model=List[Message])
def get_messages(
    chat_room_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    messages = ChatService(db).list_messages(chat_room_id, identity.user_id)
    return [Message.model_validate(m) for m in messages]

@router.post("/{chat_room_id}/messages", response_model=Message, status_code=status.HTTP_201_CREATED)
def send_message(
    chat_room_id: int,
    payload: MessageCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    message = ChatService(db).append_message(chat_room_id, identity.user_id, payload.text)
    return Message.model_validate(message)
