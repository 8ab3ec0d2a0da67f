"""Interactive conversation services."""

from bitcoin_tx_tracker.services.conversation.conversation_service import ConversationService

__all__ = ["ConversationService"]
