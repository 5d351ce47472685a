from typing import Iterable, List

from logging_config import get_logger
from schemas.messages import Event

logger = get_logger(__name__)


class Broadcaster:
    def send(self, recipients: Iterable, event: Event) -> List:
        """Serialize ``event`` once and hand it to every recipient.

        A failing recipient is logged and skipped so the rest still get the
        frame. Returns the recipients that could not be reached; if the event
        cannot be serialized at all, that is every recipient.
        """
        recipients = list(recipients)
        try:
            payload = event.model_dump_json(exclude_none=True)
        except Exception as e:
            logger.error(f"Could not serialize {event.type} for room {event.room}: {e}", exc_info=True)
            return recipients

        failed = []
        for conn in recipients:
            try:
                conn.send(payload)
            except Exception as e:
                failed.append(conn)
                logger.warning(f"Failed to deliver {event.type} to connection {conn.id}: {e}")
        logger.debug(f"Broadcast {event.type} for room {event.room} to {len(recipients) - len(failed)}/{len(recipients)} connections")
        return failed
