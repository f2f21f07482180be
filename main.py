# main.py
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import firebase_admin
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from firebase_admin import credentials, firestore
from google import genai
from loguru import logger

from auth import FirebaseTokenVerifier, Identity, current_user
from errors import CollaboratorFailure, ValidationFailure, register_error_handlers
from generator import GeminiContentGenerator
from logger import setup_logger
from models import ConversationSummary, ErrorResponse, GenerateRequest, GenerateResponse, MessageOut
from prompts import build_generation_prompt, derive_title, format_user_request, now_iso
from settings import Settings, get_settings
from store import FirestoreConversationStore

ERROR_RESPONSES = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@dataclass(frozen=True)
class Collaborators:
    verifier: Any
    store: Any
    generator: Any


def build_collaborators(settings: Settings) -> Collaborators:
    """Connect to Firebase and Gemini once, at startup."""
    try:
        firebase_app = firebase_admin.get_app()
    except ValueError:
        cred = credentials.Certificate(settings.SERVICE_ACCOUNT_KEY_PATH)
        firebase_app = firebase_admin.initialize_app(cred)

    client = genai.Client(api_key=settings.GEMINI_API_KEY)
    return Collaborators(
        verifier=FirebaseTokenVerifier(firebase_app),
        store=FirestoreConversationStore(firestore.client(app=firebase_app)),
        generator=GeminiContentGenerator(
            client,
            settings.MODEL_NAME,
            max_output_tokens=settings.MAX_OUTPUT_TOKENS,
            temperature=settings.TEMPERATURE,
        ),
    )


def get_collaborators(request: Request) -> Collaborators:
    return request.app.state.collaborators


def create_app(collaborators: Optional[Collaborators] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "collaborators", None) is None:
            logger.info(f"Initializing Firebase and Gemini (model={settings.MODEL_NAME})")
            app.state.collaborators = build_collaborators(settings)
        yield

    app = FastAPI(title="AI Content Studio API", version="1.0.0", lifespan=lifespan)
    app.state.collaborators = collaborators

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # liveness probe for the hosting platform
    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "AI Content Studio Backend is alive!"

    @app.get("/history", response_model=List[ConversationSummary], responses=ERROR_RESPONSES)
    def history(
        user: Identity = Depends(current_user),
        services: Collaborators = Depends(get_collaborators),
    ) -> List[Dict[str, Any]]:
        try:
            chats = services.store.list_conversations(user.uid)
        except Exception:
            logger.exception(f"Failed to fetch chat history for uid={user.uid}")
            raise CollaboratorFailure("Failed to fetch chat history.")
        logger.info(f"History for uid={user.uid}: {len(chats)} chat(s)")
        return chats

    @app.get("/chat/{chat_id}", response_model=List[MessageOut], responses=ERROR_RESPONSES)
    def chat_messages(
        chat_id: str,
        user: Identity = Depends(current_user),
        services: Collaborators = Depends(get_collaborators),
    ) -> List[Dict[str, Any]]:
        try:
            messages = services.store.list_messages(user.uid, chat_id)
        except Exception:
            logger.exception(f"Failed to fetch messages for uid={user.uid} chat={chat_id}")
            raise CollaboratorFailure("Failed to fetch messages.")
        return messages

    @app.post(
        "/generate",
        response_model=GenerateResponse,
        responses={400: {"model": ErrorResponse}, **ERROR_RESPONSES},
    )
    def generate(
        req: GenerateRequest,
        user: Identity = Depends(current_user),
        services: Collaborators = Depends(get_collaborators),
    ) -> GenerateResponse:
        if not req.topic or not req.platform or not req.tone:
            raise ValidationFailure()

        try:
            chat_id = services.store.create_conversation(user.uid, derive_title(req.topic), now_iso())
            logger.info(f"Created chat={chat_id} for uid={user.uid}")

            user_request = format_user_request(req.topic, req.platform, req.tone)
            services.store.add_message(user.uid, chat_id, "user", user_request, now_iso())

            prompt = build_generation_prompt(req.topic, req.platform, req.tone)
            text = services.generator.generate(prompt)

            services.store.add_message(user.uid, chat_id, "model", text, now_iso())
        except Exception as e:
            # records written before the failure are left in place
            logger.exception(f"Generation failed for uid={user.uid}")
            raise CollaboratorFailure(details=type(e).__name__)

        logger.info(f"Generated {len(text)} chars for chat={chat_id}")
        return GenerateResponse(chatId=chat_id, userRequest=user_request, response=text)

    return app


settings = get_settings()
setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)
app = create_app(settings=settings)


if __name__ == "__main__":
    logger.info(f"Server is live and running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
