from datetime import datetime

import pytest

from app.core.errors import ApiError
from app.core.messages import ErrorMessageKeys
from app.models.enums import MatchStatus
from app.schemas import match_schemas
from app.services import match_service, participant_service


@pytest.fixture
def bracket(db, make_user, make_tournament):
    creator = make_user()
    tournament = make_tournament(creator, max_participants=4)
    entrants = [participant_service.register_participant(db, tournament.id, make_user()) for _ in range(3)]
    return creator, tournament, entrants


class TestMatchService:

    def test_create_match_defaults_to_scheduled(self, db, bracket):
        creator, tournament, (p1, p2, _) = bracket

        match = match_service.create_match(
            db,
            match_schemas.MatchCreate(
                tournament_id=tournament.id,
                round=1,
                bracket_position="semifinal-1",
                participant1_id=p1.id,
                participant2_id=p2.id,
            ),
            creator.id,
        )

        assert match.status == MatchStatus.SCHEDULED
        assert match.winner_id is None
        assert match.participant1.id == p1.id
        assert match.participant2.id == p2.id

    def test_create_match_for_unknown_tournament_is_404(self, db, make_user):
        with pytest.raises(ApiError) as exc_info:
            match_service.create_match(db, match_schemas.MatchCreate(tournament_id=555, round=1), make_user().id)
        assert exc_info.value.status_code == 404

    def test_only_creator_creates_matches(self, db, bracket, make_user):
        _, tournament, _ = bracket
        with pytest.raises(ApiError) as exc_info:
            match_service.create_match(db, match_schemas.MatchCreate(tournament_id=tournament.id, round=1), make_user().id)
        assert exc_info.value.status_code == 403
        assert exc_info.value.key == ErrorMessageKeys.TOURNAMENT_NOT_OWNER

    def test_update_merges_result_fields(self, db, bracket):
        creator, tournament, (p1, p2, _) = bracket
        match = match_service.create_match(
            db,
            match_schemas.MatchCreate(tournament_id=tournament.id, round=1, participant1_id=p1.id, participant2_id=p2.id, location="Hall A"),
            creator.id,
        )

        updated = match_service.update_match(
            db,
            match.id,
            match_schemas.MatchUpdate(
                participant1_score=3,
                participant2_score=1,
                winner_id=p1.id,
                status=MatchStatus.COMPLETED,
                completed_at=datetime(2026, 3, 1, 18, 30),
            ),
            creator.id,
        )

        assert updated.participant1_score == 3
        assert updated.participant2_score == 1
        assert updated.winner.id == p1.id
        assert updated.status == MatchStatus.COMPLETED
        assert updated.completed_at == datetime(2026, 3, 1, 18, 30)
        # Untouched fields survive the merge
        assert updated.location == "Hall A"
        assert updated.round == 1

    def test_winner_outside_the_pairing_is_accepted(self, db, bracket):
        creator, tournament, (p1, p2, p3) = bracket
        match = match_service.create_match(
            db,
            match_schemas.MatchCreate(tournament_id=tournament.id, round=1, participant1_id=p1.id, participant2_id=p2.id),
            creator.id,
        )

        updated = match_service.update_match(db, match.id, match_schemas.MatchUpdate(winner_id=p3.id), creator.id)

        assert updated.winner_id == p3.id

    def test_timestamps_are_not_ordered(self, db, bracket):
        creator, tournament, _ = bracket
        match = match_service.create_match(db, match_schemas.MatchCreate(tournament_id=tournament.id, round=1), creator.id)

        updated = match_service.update_match(
            db,
            match.id,
            match_schemas.MatchUpdate(started_at=datetime(2026, 3, 2), completed_at=datetime(2026, 3, 1)),
            creator.id,
        )

        assert updated.completed_at < updated.started_at

    def test_completed_match_can_still_be_edited(self, db, bracket):
        creator, tournament, _ = bracket
        match = match_service.create_match(db, match_schemas.MatchCreate(tournament_id=tournament.id, round=1), creator.id)
        match_service.update_match(db, match.id, match_schemas.MatchUpdate(status=MatchStatus.COMPLETED), creator.id)

        updated = match_service.update_match(db, match.id, match_schemas.MatchUpdate(status=MatchStatus.DISPUTED), creator.id)

        assert updated.status == MatchStatus.DISPUTED

    def test_only_creator_updates_and_deletes(self, db, bracket, make_user):
        creator, tournament, _ = bracket
        intruder = make_user()
        match = match_service.create_match(db, match_schemas.MatchCreate(tournament_id=tournament.id, round=1), creator.id)

        with pytest.raises(ApiError) as exc_info:
            match_service.update_match(db, match.id, match_schemas.MatchUpdate(notes="fixed"), intruder.id)
        assert exc_info.value.status_code == 403

        with pytest.raises(ApiError) as exc_info:
            match_service.delete_match(db, match.id, intruder.id)
        assert exc_info.value.status_code == 403

        match_service.delete_match(db, match.id, creator.id)
        assert match_service.get_match(db, match.id) is None

    def test_list_matches_ordered_by_round_and_filtered(self, db, bracket, make_user, make_tournament):
        creator, tournament, _ = bracket
        other = make_tournament(creator, name="Other Cup")
        match_service.create_match(db, match_schemas.MatchCreate(tournament_id=tournament.id, round=2), creator.id)
        match_service.create_match(db, match_schemas.MatchCreate(tournament_id=tournament.id, round=1), creator.id)
        match_service.create_match(db, match_schemas.MatchCreate(tournament_id=other.id, round=1), creator.id)

        page = match_service.list_matches(db, tournament_id=tournament.id)

        assert page["meta"]["total"] == 2
        assert page["meta"]["per_page"] == 50
        assert [m.round for m in page["data"]] == [1, 2]
        assert match_service.list_matches(db)["meta"]["total"] == 3
