# backend/app/repositories/event_repository.py
"""
Event Repository for the Enescena platform

Events and their line-up entries (EventArtist).
"""

import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ..core.constants import DEFAULT_QUERY_LIMIT
from ..core.enums import EventStatus
from ..core.exceptions import RepositoryException
from ..models.artist import Artist
from ..models.event import Event, EventArtist
from .base_repository import BaseRepository
from .slug_repository_mixin import SlugRepositoryMixin

logger = logging.getLogger(__name__)


class EventRepository(BaseRepository[Event], SlugRepositoryMixin):
    """Repository for events."""

    def __init__(self, db: Session):
        super().__init__(db, Event)
        self.logger = logging.getLogger(__name__)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            joinedload(Event.venue),
            selectinload(Event.artists).joinedload(EventArtist.artist).joinedload(Artist.user),
        )

    def list_published(self, limit: int = DEFAULT_QUERY_LIMIT) -> List[Event]:
        return self._list(Event.status == EventStatus.PUBLISHED.value, limit)

    def list_for_venue(self, venue_id: str, limit: int = DEFAULT_QUERY_LIMIT) -> List[Event]:
        return self._list(Event.venue_id == venue_id, limit)

    def list_for_artist(self, artist_id: str, limit: int = DEFAULT_QUERY_LIMIT) -> List[Event]:
        """Events whose line-up includes the artist."""
        return self._list(Event.artists.any(EventArtist.artist_id == artist_id), limit)

    def list_all(self, limit: int = DEFAULT_QUERY_LIMIT) -> List[Event]:
        return self._list(None, limit)

    def list_awaiting_venue(self, venue_id: str) -> List[Event]:
        """Artist requests the venue has not answered yet, newest first."""
        try:
            return cast(
                List[Event],
                self._apply_eager_loading(self.db.query(Event))
                .filter(
                    Event.venue_id == venue_id,
                    Event.status == EventStatus.PENDING_VENUE_APPROVAL.value,
                )
                .order_by(Event.created_at.desc(), Event.id.desc())
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing pending approvals for venue {venue_id}: {str(e)}")
            raise RepositoryException(f"Failed to list pending approvals: {str(e)}")

    def _list(self, criterion, limit: int) -> List[Event]:
        try:
            query = self._apply_eager_loading(self.db.query(Event))
            if criterion is not None:
                query = query.filter(criterion)
            return cast(List[Event], query.order_by(Event.event_date).limit(limit).all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing events: {str(e)}")
            raise RepositoryException(f"Failed to list events: {str(e)}")


class EventArtistRepository(BaseRepository[EventArtist]):
    """Repository for event line-up entries."""

    def __init__(self, db: Session):
        super().__init__(db, EventArtist)
        self.logger = logging.getLogger(__name__)

    def get_entry(self, event_id: str, artist_id: str) -> Optional[EventArtist]:
        return cast(
            Optional[EventArtist], self.find_one_by(event_id=event_id, artist_id=artist_id)
        )

    def list_unconfirmed(self, event_id: str) -> List[EventArtist]:
        try:
            return cast(
                List[EventArtist],
                self.db.query(EventArtist)
                .options(joinedload(EventArtist.artist))
                .filter(EventArtist.event_id == event_id, EventArtist.confirmed.is_(False))
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing line-up for event {event_id}: {str(e)}")
            raise RepositoryException(f"Failed to list line-up: {str(e)}")
