from collections import Counter
from typing import Dict, List, Optional

from backend import RoomRegistry
from exceptions import RoomNotFound
from logging_config import get_logger
from schemas.messages import WordsAddedEvent
from services.broadcaster import Broadcaster

logger = get_logger(__name__)


def split_tokens(raw_text: str) -> List[str]:
    # Split on single spaces; runs of spaces leave empty tokens in place.
    return raw_text.split(" ")


class WordLedger:
    def __init__(self, registry: RoomRegistry, broadcaster: Broadcaster):
        self.registry = registry
        self.broadcaster = broadcaster

    def add_words(self, room_id: str, raw_text: str, requester=None) -> Optional[List[str]]:
        try:
            room = self.registry.get(room_id)
        except RoomNotFound:
            requested_by = requester.id if requester is not None else "unknown"
            logger.info(f"Add words ignored: room {room_id} not found (requested by {requested_by})")
            return None

        tokens = split_tokens(raw_text)
        room.words.extend(tokens)
        logger.debug(f"Appended {len(tokens)} tokens to room {room_id} ({len(room.words)} total)")
        self.broadcaster.send(room.members, WordsAddedEvent(room=room.id, words=list(room.words)))
        return tokens

    def frequencies(self, room_id: str) -> Dict[str, int]:
        """Occurrence count per distinct word, in first-seen order.

        Raises RoomNotFound for an unknown room.
        """
        room = self.registry.get(room_id)
        return dict(Counter(room.words))
