# taste/services/messages.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List

from taste.models import Message

MATCH_FIELDS = ("channel_name", "channel_message_id")


def read_messages(messages: Iterable[Dict[str, Any]]) -> List[Message]:
    """
    Upsert de mensajes por (channel_name, channel_message_id).
    En serie: el orden de llegada por canal se respeta.
    """
    stored = []
    for message in messages:
        lookup = {f: message[f] for f in MATCH_FIELDS}
        defaults = {k: v for k, v in message.items() if k not in MATCH_FIELDS}
        obj, _ = Message.objects.update_or_create(defaults=defaults, **lookup)
        stored.append(obj)
    return stored
