"""articles table."""

from sqlalchemy import Text, text
from sqlalchemy.orm import Mapped, mapped_column

from softcrud.core.database import Base, SoftDeleteMixin, TimestampMixin


class Article(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default=text("''"))
