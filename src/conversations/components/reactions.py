from typing import Optional

from src.domain.models import Message, Reaction
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)

REACTION_PALETTE = ["👍", "❤️", "😂", "😮", "😢", "🙏"]


class ReactionComponent:
    def __init__(self, self_name: str):
        self.self_name = self_name

    def toggle(self, message: Message, emoji: str, user: Optional[str] = None) -> Optional[Reaction]:
        """Flips ``user`` membership in the message's ``emoji`` reaction.

        Returns the reaction after the flip, or None when it dropped to zero
        users and was removed from the message.
        """
        user = user or self.self_name
        reaction = message.get_reaction(emoji)

        if reaction is None:
            reaction = Reaction(emoji=emoji, users={user})
            message.reactions.append(reaction)
            logger.info("reaction_added", message_id=message.id, emoji=emoji, user=user)
            return reaction

        if user in reaction.users:
            reaction.users.discard(user)
            if not reaction.users:
                message.reactions.remove(reaction)
                logger.info("reaction_removed", message_id=message.id, emoji=emoji, user=user)
                return None
            return reaction

        reaction.users.add(user)
        return reaction
