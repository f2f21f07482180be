"""
Firestore-backed conversation store.

Layout:
    users/{uid}/chats/{chatId}                      title, createdAt
    users/{uid}/chats/{chatId}/messages/{messageId} role, text, createdAt

`createdAt` is written as an ISO-8601 string. Documents written by other
clients may hold a Firestore timestamp instead; those are read back as
ISO-8601 strings too.
"""

from datetime import datetime
from typing import Any, Dict, List

from firebase_admin import firestore

from prompts import to_iso

USERS = "users"
CHATS = "chats"
MESSAGES = "messages"
CREATED_AT = "createdAt"


def _to_record(data: Dict[str, Any]) -> Dict[str, Any]:
    record = dict(data or {})
    created_at = record.get(CREATED_AT)
    if isinstance(created_at, datetime):
        record[CREATED_AT] = to_iso(created_at)
    return record


class FirestoreConversationStore:
    def __init__(self, client):
        self._db = client

    def _chats(self, uid: str):
        return self._db.collection(USERS).document(uid).collection(CHATS)

    def _messages(self, uid: str, chat_id: str):
        return self._chats(uid).document(chat_id).collection(MESSAGES)

    def create_conversation(self, uid: str, title: str, created_at: str) -> str:
        _, ref = self._chats(uid).add({"title": title, CREATED_AT: created_at})
        return ref.id

    def add_message(self, uid: str, chat_id: str, role: str, text: str, created_at: str) -> str:
        _, ref = self._messages(uid, chat_id).add({"role": role, "text": text, CREATED_AT: created_at})
        return ref.id

    def list_conversations(self, uid: str) -> List[Dict[str, Any]]:
        query = self._chats(uid).order_by(CREATED_AT, direction=firestore.Query.DESCENDING)
        return [{"id": doc.id, **_to_record(doc.to_dict())} for doc in query.stream()]

    def list_messages(self, uid: str, chat_id: str) -> List[Dict[str, Any]]:
        query = self._messages(uid, chat_id).order_by(CREATED_AT)
        return [_to_record(doc.to_dict()) for doc in query.stream()]
