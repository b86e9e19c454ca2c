import datetime

import pytest

from app.core.exceptions import ForbiddenError, NotFoundError
from app.models.event import Event
from app.models.match import Match
from app.models.match_request import MatchRequest
from app.schemas.event_schemas import EventCreate, EventUpdate
from app.schemas.match_schemas import MatchCreate, MatchUpdate
from app.services import event_service, match_request_service


class TestEventService:

    def test_create_match_event_with_matches(self, db_session, organizer):
        event_in = EventCreate(
            title="Sunday Superfights",
            event_type="match",
            city="Curitiba",
            allow_open_requests=True,
            matches=[
                MatchCreate(belt_level="Purple", weight_limit=82.3, match_format="no_gi", time_limit=10),
                MatchCreate(belt_level="Brown", age_category="masters", sub_only=True),
            ],
        )

        event = event_service.create_event(db_session, event_in, organizer.id)

        assert event.id is not None
        assert event.user_id == organizer.id
        assert event.event_type == "match"
        assert len(event.matches) == 2
        assert event.matches[0].match_format == "no_gi"
        assert event.matches[0].status == "pending"
        assert event.matches[1].age_category == "masters"
        assert event.matches[1].time_limit is None

    def test_get_event_not_found(self, db_session):
        assert event_service.get_event(db_session, 123) is None
        with pytest.raises(NotFoundError):
            event_service.get_event_or_404(db_session, 123)

    def test_list_events_filters_and_orders(self, db_session, organizer):
        for title, event_type, city, day in [
            ("Copa Floripa", "tournament", "Florianopolis", 3),
            ("Rio Superfights", "match", "Rio de Janeiro", 2),
            ("Open Mat Showdown", "match", "Florianopolis", 1),
        ]:
            db_session.add(Event(
                user_id=organizer.id,
                title=title,
                event_type=event_type,
                city=city,
                event_date=datetime.datetime(2026, 12, day),
            ))
        db_session.commit()

        assert [e.title for e in event_service.list_events(db_session)] == [
            "Open Mat Showdown", "Rio Superfights", "Copa Floripa",
        ]
        assert [e.title for e in event_service.list_events(db_session, event_type="tournament")] == ["Copa Floripa"]
        assert [e.title for e in event_service.list_events(db_session, city="florianopolis")] == [
            "Open Mat Showdown", "Copa Floripa",
        ]
        assert [e.title for e in event_service.list_events(db_session, search="superfights")] == ["Rio Superfights"]
        assert [e.title for e in event_service.list_events(db_session, search="floripa")] == ["Copa Floripa"]

    def test_update_event_by_organizer(self, db_session, open_event, organizer):
        updated = event_service.update_event(
            db_session, open_event.id, EventUpdate(venue="Gracie Barra HQ", allow_open_requests=False), organizer.id
        )
        assert updated.venue == "Gracie Barra HQ"
        assert updated.allow_open_requests is False
        assert updated.title == "Friday Night Superfights"

    def test_update_event_by_someone_else(self, db_session, open_event, athlete):
        with pytest.raises(ForbiddenError):
            event_service.update_event(db_session, open_event.id, EventUpdate(title="Hijacked"), athlete.id)
        assert event_service.get_event(db_session, open_event.id).title == "Friday Night Superfights"

    def test_delete_event_cascades(self, db_session, open_event, open_match, organizer, athlete):
        match_request_service.submit_request(db_session, open_match.id, athlete.id, 1)
        event_id = open_event.id

        assert event_service.delete_event(db_session, event_id, organizer.id) is True

        assert event_service.get_event(db_session, event_id) is None
        assert db_session.query(Match).filter(Match.event_id == event_id).count() == 0
        assert db_session.query(MatchRequest).count() == 0

    def test_delete_event_requires_organizer(self, db_session, open_event, athlete):
        with pytest.raises(ForbiddenError):
            event_service.delete_event(db_session, open_event.id, athlete.id)


class TestMatchCatalog:

    def test_add_update_delete_match(self, db_session, open_event, organizer):
        match = event_service.add_match(
            db_session, open_event.id, MatchCreate(belt_level="White", gender="female", weight_limit=58.5), organizer.id
        )
        assert match.event_id == open_event.id

        match = event_service.update_match(db_session, match.id, MatchUpdate(match_format="both", time_limit=8), organizer.id)
        assert match.match_format == "both"
        assert match.time_limit == 8
        assert match.belt_level == "White"

        assert event_service.delete_match(db_session, match.id, organizer.id) is True
        assert event_service.get_match(db_session, match.id) is None

    def test_match_changes_require_organizer(self, db_session, open_event, open_match, athlete):
        with pytest.raises(ForbiddenError):
            event_service.add_match(db_session, open_event.id, MatchCreate(), athlete.id)
        with pytest.raises(ForbiddenError):
            event_service.update_match(db_session, open_match.id, MatchUpdate(sub_only=True), athlete.id)
        with pytest.raises(ForbiddenError):
            event_service.delete_match(db_session, open_match.id, athlete.id)

    def test_unknown_match(self, db_session):
        with pytest.raises(NotFoundError):
            event_service.get_match_or_404(db_session, 77)
