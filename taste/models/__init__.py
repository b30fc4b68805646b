from taste.models.settings import TasteSettings
from taste.models.message import Message

__all__ = ["TasteSettings", "Message"]
