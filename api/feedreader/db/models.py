"""SQLAlchemy models for the feed reader schema."""

from sqlalchemy import (
    BigInteger, Boolean, Column, DateTime, ForeignKey, Index, Text, text
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Create base class for models
Base = declarative_base()


class Feed(Base):
    """Feeds table model."""
    __tablename__ = 'feeds'

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    rss_link = Column(Text, nullable=False, unique=True)
    site_link = Column(Text, nullable=False)
    description = Column(Text, nullable=False, server_default=text("''"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    last_updated = Column(DateTime(timezone=True))


class Article(Base):
    """Articles table model."""
    __tablename__ = 'articles'

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    feed_id = Column(BigInteger, ForeignKey('feeds.id', ondelete='CASCADE'), nullable=False)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False, server_default=text("''"))
    description = Column(Text, nullable=False, server_default=text("''"))
    link = Column(Text, nullable=False, unique=True)
    # UTC seconds since the epoch; first half of the article pagination key
    published = Column(BigInteger, nullable=False)
    read = Column(Boolean, nullable=False, server_default=text('false'))
    read_date = Column(DateTime(timezone=True))
    favorited = Column(Boolean, nullable=False, server_default=text('false'))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('articles_published_id', 'published', 'id'),
        Index('articles_feed_id', 'feed_id'),
    )
