"""Stateless structured-completion endpoint: runs one completion without touching any store."""

from fastapi import APIRouter, Depends

from app.api.chat import get_completion_requestor
from app.api.deps import get_current_user_id
from app.api.schemas import CompletionRequestBody
from app.core.errors import InvalidRequest
from app.services.completion import CompletionRequestor

router = APIRouter()


@router.post("/chat")
async def completion_chat(
    body: CompletionRequestBody,
    _user_id: int = Depends(get_current_user_id),
    requestor: CompletionRequestor = Depends(get_completion_requestor),
):
    if body.prev_messages is None or not body.user_message or body.session is None:
        raise InvalidRequest(
            "Missing required fields. Please provide prevMessages, userMessage, and session."
        )

    result = await requestor.request(
        body.prev_messages,
        body.user_message,
        body.session.system_instruction,
        redirectable=body.session.redirect_to_other_category,
        topics=body.session.topics,
    )
    response = {"message": result.message}
    if result.redirect_to_other_category:
        response["redirectToOtherCategory"] = result.redirect_to_other_category
    return {"response": response}
