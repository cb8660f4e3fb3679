from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import get_current_user
from models.message import Message
from models.user import User
from schemas.message import MessageCreate, MessageListResponse, MessageResponse
from services.matching import get_match_for_participant
from utils.user_helpers import to_message_read

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Отправить сообщение в матч",
)
async def send_message(
    payload: MessageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    if not payload.match_id or payload.content is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing matchId or content")

    content = payload.content.strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message content cannot be empty")

    match = await get_match_for_participant(db, current_user.id, payload.match_id)

    message = Message(
        match_id=match.id,
        sender_id=current_user.id,
        receiver_id=match.other_participant(current_user.id),
        content=content,
    )
    db.add(message)
    await db.commit()
    await db.refresh(message)
    return MessageResponse(message=to_message_read(message))


@router.get(
    "/{match_id}",
    response_model=MessageListResponse,
    summary="Переписка матча в порядке отправки; входящие помечаются прочитанными",
)
async def get_messages(
    match_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageListResponse:
    await get_match_for_participant(db, current_user.id, match_id)

    result = await db.execute(
        select(Message)
        .where(Message.match_id == match_id)
        .order_by(Message.created_at.asc(), Message.id.asc())
    )
    messages = result.scalars().all()
    response = MessageListResponse(messages=[to_message_read(m) for m in messages])

    unread = [m.id for m in messages if m.receiver_id == current_user.id and not m.read]
    if unread:
        await db.execute(
            update(Message).where(Message.id.in_(unread)).values(read=True)
        )
        await db.commit()

    return response
