"""
Consultation session lifecycle.

An owner has one active consultation. It is loaded (or created with a
greeting) when the consultation is opened, and every turn appends the user's
message plus the scripted reply before writing the whole log back to the
store. The full log is retransmitted on every turn, so bytes written for a
session grow quadratically with the number of turns.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from models import Consultation, Message, ProfileContext
from utils.database import now_iso
from utils.errors import StoreUnavailable
from utils.response_engine import generate_response

logger = logging.getLogger(__name__)

COLLECTION = 'consultations'
DEFAULT_TOPIC = 'General Career Consultation'
GREETING = (
    "Hello! I'm your AI career coach. How can I help you today? "
    "You can ask me about career transitions, skill development, job search strategies, "
    "or any other career-related questions."
)


def initial_messages() -> List[Message]:
    """The log a brand new consultation starts with"""
    return [Message(role='assistant', content=GREETING)]


def _serialize(messages: List[Message]) -> List[Dict[str, str]]:
    return [m.to_dict() for m in messages]


def _persist(store, session_id: str, messages: List[Message]) -> None:
    # Full replace-write: the whole log goes over the wire every time
    store.update(COLLECTION, session_id, {
        'messages': _serialize(messages),
        'updated_at': now_iso(),
    })
    logger.debug(f"Persisted {len(messages)} messages for consultation {session_id}")


def load_or_create(store, owner_id: Optional[str]) -> Optional[Consultation]:
    """
    Adopt the owner's most recent active consultation, or create one.

    Args:
        store: Object exposing find/insert/update
        owner_id (str): Owner of the consultation

    Returns:
        Optional[Consultation]: The adopted session, or None when no owner is known
    """
    if not owner_id:
        logger.debug("No active profile; skipping consultation load")
        return None

    existing = store.find(
        COLLECTION,
        {'owner_id': owner_id, 'status': 'active'},
        order_by=('created_at', 'desc'),
        limit=1,
    )

    if existing:
        consultation = Consultation.from_record(existing[0])
        if not consultation.messages:
            consultation.messages = initial_messages()
        logger.info(f"Adopted consultation {consultation.id} for owner {owner_id} "
                    f"with {len(consultation.messages)} messages")
        return consultation

    created = store.insert(COLLECTION, {
        'owner_id': owner_id,
        'topic': DEFAULT_TOPIC,
        'messages': _serialize(initial_messages()),
        'status': 'active',
    })
    consultation = Consultation.from_record(created)
    if not consultation.messages:
        consultation.messages = initial_messages()
    logger.info(f"Created consultation {consultation.id} for owner {owner_id}")
    return consultation


def send(
    store,
    owner_id: Optional[str],
    session_id: Optional[str],
    current_log: List[Message],
    text: Optional[str],
) -> List[Message]:
    """
    Run one turn: append the user's message and the coach reply, then persist.

    Empty input, a missing owner or a missing session leaves the log untouched
    and makes no store call. Store errors propagate after the new log has been
    built; nothing is rolled back.

    Returns:
        List[Message]: The new full log
    """
    if not text or not text.strip() or not owner_id or not session_id:
        return current_log

    user_message = Message(role='user', content=text)
    assistant_message = Message(role='assistant', content=generate_response(text))
    final_log = list(current_log) + [user_message, assistant_message]

    _persist(store, session_id, final_log)
    return final_log


def get_consultation_stats(store, profile: Optional[ProfileContext]) -> Dict[str, Any]:
    """Dashboard counters for the signed-in owner"""
    if profile is None or not profile.id:
        return {'consultations': 0, 'first_name': 'there'}

    return {
        'consultations': store.count(COLLECTION, {'owner_id': profile.id}),
        'first_name': profile.first_name,
    }


class SessionState(Enum):
    UNINITIALIZED = 'uninitialized'
    LOADING = 'loading'
    READY = 'ready'
    PENDING = 'pending'


class ConsultationManager:
    """
    Holds one owner's consultation log in memory and keeps the store in step.

    Local state is updated optimistically. When a write fails the log stays
    advanced, the manager is flagged unsynced and the error is re-raised;
    sync() or the next successful send brings the store back in line.
    """

    def __init__(self, store, profile: Optional[ProfileContext]):
        self.store = store
        self.profile = profile
        self.state = SessionState.UNINITIALIZED
        self.session_id: Optional[str] = None
        self.topic: Optional[str] = None
        self.messages: List[Message] = initial_messages()
        self._synced_length = 0

    @property
    def owner_id(self) -> Optional[str]:
        return self.profile.id if self.profile else None

    @property
    def is_synced(self) -> bool:
        return self._synced_length == len(self.messages)

    def activate(self) -> Optional[str]:
        """Load or create the session once per manager; returns the session id"""
        if self.session_id is not None:
            return self.session_id
        if not self.owner_id:
            return None

        previous_state = self.state
        self.state = SessionState.LOADING
        try:
            consultation = load_or_create(self.store, self.owner_id)
        except StoreUnavailable:
            self.state = previous_state
            raise

        self.session_id = consultation.id
        self.topic = consultation.topic
        self.messages = list(consultation.messages)
        self._synced_length = len(self.messages)
        self.state = SessionState.READY
        return self.session_id

    def send(self, text: Optional[str]) -> List[Message]:
        """Append one turn locally and persist the full log"""
        if not text or not text.strip() or not self.owner_id or self.session_id is None:
            return self.messages

        self.messages = self.messages + [Message(role='user', content=text)]
        self.state = SessionState.PENDING
        self.messages = self.messages + [Message(role='assistant', content=generate_response(text))]
        try:
            _persist(self.store, self.session_id, self.messages)
        except StoreUnavailable:
            logger.warning(f"Consultation {self.session_id} has "
                           f"{len(self.messages) - self._synced_length} unsynced messages")
            raise
        finally:
            self.state = SessionState.READY

        self._synced_length = len(self.messages)
        return self.messages

    def sync(self) -> bool:
        """Rewrite the full local log if a previous write failed; returns True when in sync"""
        if self.session_id is None:
            return False
        if self.is_synced:
            return True

        _persist(self.store, self.session_id, self.messages)
        self._synced_length = len(self.messages)
        logger.info(f"Reconciled consultation {self.session_id} ({len(self.messages)} messages)")
        return True
