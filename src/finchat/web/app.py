"""FastAPI application exposing the chat webhook and the transfer endpoint."""

import asyncio
import functools
import logging
from datetime import date
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, ValidationError as PydanticValidationError, condecimal

from finchat.config import Settings
from finchat.database.base import LedgerStore
from finchat.database.models import create_session_factory
from finchat.database.sqlalchemy_db import SQLAlchemyLedgerStore
from finchat.domain import replies
from finchat.domain.dispatcher import InboundMessage, Reply, WebhookDispatcher
from finchat.domain.errors import (
    DomainError,
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountError,
    StoreError,
    UnauthorizedError,
    invalid_amount,
    same_account,
)
from finchat.domain.transfer import TransferService
from finchat.web.auth import IdentityVerifier, StaticTokenVerifier, bearer_token

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

INVALID_PARAMETERS = "Parâmetros inválidos"
TOKEN_REQUIRED = "Token de autorização necessário"
TOKEN_INVALID = "Token inválido"
TRANSFER_FAILED = "Erro ao executar transferência"
TRANSFER_UNCONFIRMED = (
    "Não foi possível confirmar a transferência a tempo. Confira o saldo antes de tentar novamente"
)
SERVER_ERROR = "Erro interno do servidor"
TRANSFER_OK = "Transferência realizada com sucesso"

_TRANSFER_ERROR_STATUS = {
    InvalidAmountError: 400,
    SameAccountError: 400,
    InsufficientFundsError: 400,
    UnauthorizedError: 403,
}


class TransferRequest(BaseModel):
    """Body of ``POST /transfer``."""

    from_account: int
    to_account: int
    amount: condecimal(decimal_places=2)
    description: Optional[str] = None


def extract_message(payload: Any) -> InboundMessage:
    """Pull the chat id and text out of a Telegram update envelope."""
    message = payload.get("message") if isinstance(payload, dict) else None
    if not isinstance(message, dict):
        return InboundMessage(chat_id=None, text=None)

    chat = message.get("chat")
    chat_id = chat.get("id") if isinstance(chat, dict) else None
    text = message.get("text")
    return InboundMessage(
        chat_id=str(chat_id) if chat_id is not None else None,
        text=text if isinstance(text, str) else None,
    )


def _reply_response(reply: Reply) -> Response:
    if reply.status_code == 200:
        return JSONResponse({"text": reply.text}, headers=CORS_HEADERS)
    return PlainTextResponse(reply.text, status_code=reply.status_code, headers=CORS_HEADERS)


async def _run_with_deadline(func: Callable[..., Any], *args: Any, timeout: float) -> Any:
    """Run blocking ``func`` in a worker thread, giving up after ``timeout`` seconds.

    On timeout the thread is abandoned, not interrupted.
    """
    loop = asyncio.get_running_loop()
    return await asyncio.wait_for(loop.run_in_executor(None, functools.partial(func, *args)), timeout)


def _json_error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


def create_app(
    settings: Settings,
    store_factory: Optional[Callable[[], LedgerStore]] = None,
    verifier: Optional[IdentityVerifier] = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    """Build the web application.

    Args:
        settings: Service settings
        store_factory: Returns a fresh store per request (defaults to SQLAlchemy
            stores sharing one engine for ``settings.database_url``)
        verifier: Bearer credential verifier (defaults to the configured static tokens)
        today: Clock passed to the domain services
    """
    if store_factory is None:
        session_factory = create_session_factory(settings.database_url)

        def store_factory() -> LedgerStore:
            return SQLAlchemyLedgerStore(settings.database_url, session_factory=session_factory)

    verifier = verifier or StaticTokenVerifier(settings.api_tokens)

    def dispatch(message: InboundMessage) -> Reply:
        try:
            store = store_factory()
            try:
                return WebhookDispatcher(store, today=today).handle(message)
            finally:
                store.disconnect()
        except Exception:
            logger.exception("Ledger store failed for chat %s", message.chat_id)
            return Reply(replies.INTERNAL_ERROR, 500)

    def execute_transfer(owner_id: str, body: TransferRequest) -> int:
        store = store_factory()
        try:
            return TransferService(store, today=today).transfer(
                owner_id=owner_id,
                from_account_id=body.from_account,
                to_account_id=body.to_account,
                amount=body.amount,
                description=body.description,
            )
        finally:
            store.disconnect()

    app = FastAPI(title="finchat")

    @app.options("/telegram-webhook")
    @app.options("/transfer")
    async def preflight() -> Response:
        return Response(headers=CORS_HEADERS)

    @app.post("/telegram-webhook")
    async def telegram_webhook(request: Request) -> Response:
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        message = extract_message(payload)

        try:
            reply = await _run_with_deadline(dispatch, message, timeout=settings.request_timeout)
        except asyncio.TimeoutError:
            # The write may still finish; it is not retried here
            logger.warning("Message from chat %s timed out after %ss", message.chat_id, settings.request_timeout)
            reply = Reply(replies.TRY_AGAIN)
        return _reply_response(reply)

    @app.post("/transfer")
    async def transfer(request: Request) -> Response:
        try:
            body = TransferRequest.model_validate(await request.json())
        except (ValueError, PydanticValidationError):
            return _json_error(INVALID_PARAMETERS, 400)
        if body.amount <= 0:
            return _json_error(invalid_amount(), 400)
        if body.from_account == body.to_account:
            return _json_error(same_account(), 400)

        token = bearer_token(request.headers.get("authorization"))
        if token is None:
            return _json_error(TOKEN_REQUIRED, 401)
        owner_id = verifier.verify(token)
        if owner_id is None:
            return _json_error(TOKEN_INVALID, 401)

        try:
            transfer_id = await _run_with_deadline(
                execute_transfer, owner_id, body, timeout=settings.request_timeout
            )
        except StoreError:
            return _json_error(TRANSFER_FAILED, 500)
        except DomainError as exc:
            status_code = next(
                (code for error_type, code in _TRANSFER_ERROR_STATUS.items() if isinstance(exc, error_type)),
                400,
            )
            return _json_error(str(exc), status_code)
        except asyncio.TimeoutError:
            # The worker may still commit
            logger.warning("Transfer for owner %s timed out after %ss", owner_id, settings.request_timeout)
            return _json_error(TRANSFER_UNCONFIRMED, 504)
        except Exception:
            logger.exception("Transfer endpoint failed for owner %s", owner_id)
            return _json_error(SERVER_ERROR, 500)

        return JSONResponse(
            {"success": True, "message": TRANSFER_OK, "transfer_id": transfer_id},
            headers=CORS_HEADERS,
        )

    return app
