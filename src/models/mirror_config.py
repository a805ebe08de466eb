import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, TIMESTAMP, ForeignKey, Boolean, Enum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from src.interfaces.mirror import MirrorConfigStatus
from src.interfaces.tiers import Platform
from src.models.base import Base

if TYPE_CHECKING:
    from src.models.user import User


class MirrorConfig(Base):
    __tablename__ = "mirror_configs"

    def __repr__(self):
        return (
            f"MirrorConfig(id='{self.id}', user_id='{self.user_id}', source_platform={self.source_platform}, "
            f"active={self.active}, status={self.status})"
        )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    source_platform: Mapped[Platform] = mapped_column(Enum(Platform), nullable=False, default=Platform.DISCORD)
    # Telegram source chat when source_platform is TELEGRAM, Discord channel otherwise
    source_channel_id: Mapped[str | None] = mapped_column(String, nullable=True)
    # Destination Telegram chat, unset when relaying to a Discord webhook
    telegram_chat_id: Mapped[str | None] = mapped_column(String, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status: Mapped[MirrorConfigStatus] = mapped_column(
        Enum(MirrorConfigStatus), nullable=False, default=MirrorConfigStatus.ACTIVE
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, default=func.current_timestamp())

    user: Mapped["User"] = relationship("User", back_populates="mirror_configs")

    def __init__(
        self,
        user_id: str,
        source_platform: Platform = Platform.DISCORD,
        source_channel_id: str | None = None,
        telegram_chat_id: str | None = None,
        active: bool = True,
        status: MirrorConfigStatus = MirrorConfigStatus.ACTIVE,
        created_at: datetime | None = None,
        id: str | None = None,
    ):
        self.id = id if id is not None else str(uuid.uuid4())
        self.user_id = user_id
        self.source_platform = source_platform
        self.source_channel_id = source_channel_id
        self.telegram_chat_id = telegram_chat_id
        self.active = active
        self.status = status
        if created_at is not None:
            self.created_at = created_at

    @property
    def destination_platform(self) -> Platform | None:
        """
        Platform the messages are relayed to.

        Discord sources with a Telegram chat go to Telegram, Telegram sources only when the chat differs
        from the source one. A Telegram chat mirrored onto itself has no distinct destination (None),
        everything else is delivered through a Discord webhook.
        """
        if self.telegram_chat_id:
            if self.source_platform == Platform.DISCORD:
                return Platform.TELEGRAM
            if self.source_channel_id and self.telegram_chat_id != self.source_channel_id:
                return Platform.TELEGRAM
            if self.telegram_chat_id == self.source_channel_id:
                return None
        return Platform.DISCORD
