# carefund/routers/chat.py
from fastapi import APIRouter, Depends

from carefund.deps import get_chat
from carefund.schemas import ChatIn, ChatOut

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ChatOut)
async def chat(body: ChatIn, chat=Depends(get_chat)):
    reply = await chat.reply([t.model_dump() for t in body.history])
    return {"response": reply}
