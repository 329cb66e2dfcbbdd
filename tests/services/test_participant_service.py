from datetime import datetime
from unittest.mock import patch

import pytest

from app.core.errors import ApiError
from app.core.messages import ErrorMessageKeys
from app.models.enums import ParticipantStatus, TournamentStatus
from app.models.participant import TournamentParticipant
from app.schemas import participant_schemas, team_schemas
from app.services import participant_service, team_service


class TestRegistrationGate:

    def test_register_individual_success(self, db, make_user, make_tournament):
        creator = make_user()
        player = make_user()
        tournament = make_tournament(creator)

        participant = participant_service.register_participant(db, tournament.id, player)

        assert participant.id is not None
        assert participant.tournament_id == tournament.id
        assert participant.user_id == player.id
        assert participant.team_id is None
        assert participant.status == ParticipantStatus.REGISTERED
        assert participant.registered_at is not None
        assert participant.seed is None

    def test_unknown_tournament_is_404(self, db, make_user):
        player = make_user()
        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, 999, player)
        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("status", [
        TournamentStatus.DRAFT,
        TournamentStatus.REGISTRATION_CLOSED,
        TournamentStatus.IN_PROGRESS,
        TournamentStatus.COMPLETED,
        TournamentStatus.CANCELLED,
    ])
    def test_registration_requires_open_status(self, db, make_user, make_tournament, status):
        creator = make_user()
        player = make_user()
        tournament = make_tournament(creator, status=status)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, player)
        assert exc_info.value.status_code == 400
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_REGISTRATION_NOT_OPEN

    def test_capacity_is_enforced(self, db, make_user, make_tournament):
        creator = make_user()
        tournament = make_tournament(creator, max_participants=2)
        participant_service.register_participant(db, tournament.id, make_user())
        participant_service.register_participant(db, tournament.id, make_user())

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, make_user())
        assert exc_info.value.status_code == 400
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_TOURNAMENT_FULL
        assert participant_service.count_participants(db, tournament.id) == 2

    def test_withdrawn_participant_keeps_its_slot(self, db, make_user, make_tournament):
        creator = make_user()
        first = make_user()
        tournament = make_tournament(creator, max_participants=1)
        entry = participant_service.register_participant(db, tournament.id, first)
        participant_service.withdraw_participant(db, entry.id, first.id)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, make_user())
        assert exc_info.value.status_code == 400
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_TOURNAMENT_FULL
        assert participant_service.count_participants(db, tournament.id) == 1

    def test_duplicate_registration_is_409(self, db, make_user, make_tournament):
        creator = make_user()
        player = make_user()
        tournament = make_tournament(creator)
        participant_service.register_participant(db, tournament.id, player)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, player)
        assert exc_info.value.status_code == 409
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_ALREADY_REGISTERED

    def test_full_is_reported_before_duplicate(self, db, make_user, make_tournament):
        creator = make_user()
        player = make_user()
        tournament = make_tournament(creator, max_participants=1)
        participant_service.register_participant(db, tournament.id, player)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, player)
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_TOURNAMENT_FULL

    def test_team_based_tournament_requires_team(self, db, make_user, make_tournament):
        creator = make_user()
        tournament = make_tournament(creator, is_team_based=True, team_size=2)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, make_user())
        assert exc_info.value.status_code == 400
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_TEAM_REQUIRED

    def test_individual_tournament_rejects_team(self, db, make_user, make_tournament):
        creator = make_user()
        captain = make_user()
        team = team_service.create_team(db, team_schemas.TeamCreate(name="Wolves"), captain.id)
        tournament = make_tournament(creator)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, captain, team_id=team.id)
        assert exc_info.value.status_code == 400
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_INDIVIDUAL_ONLY

    def test_team_registration_by_captain(self, db, make_user, make_tournament):
        creator = make_user()
        captain = make_user()
        team = team_service.create_team(db, team_schemas.TeamCreate(name="Wolves"), captain.id)
        tournament = make_tournament(creator, is_team_based=True)

        participant = participant_service.register_participant(db, tournament.id, captain, team_id=team.id)

        assert participant.team_id == team.id
        assert participant.user_id is None

    def test_team_member_can_register_team(self, db, make_user, make_tournament):
        creator = make_user()
        captain = make_user()
        member = make_user()
        team = team_service.create_team(db, team_schemas.TeamCreate(name="Wolves"), captain.id)
        team_service.add_member(db, team.id, team_schemas.TeamMemberAdd(user_id=member.id), captain.id)
        tournament = make_tournament(creator, is_team_based=True)

        participant = participant_service.register_participant(db, tournament.id, member, team_id=team.id)

        assert participant.team_id == team.id
        assert participant.status == ParticipantStatus.REGISTERED

    def test_team_registration_with_unknown_team_is_404(self, db, make_user, make_tournament):
        creator = make_user()
        tournament = make_tournament(creator, is_team_based=True)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, make_user(), team_id=4242)
        assert exc_info.value.status_code == 404

    def test_duplicate_team_registration_is_409(self, db, make_user, make_tournament):
        creator = make_user()
        captain = make_user()
        team = team_service.create_team(db, team_schemas.TeamCreate(name="Wolves"), captain.id)
        tournament = make_tournament(creator, is_team_based=True)
        participant_service.register_participant(db, tournament.id, captain, team_id=team.id)

        with pytest.raises(ApiError) as exc_info:
            participant_service.register_participant(db, tournament.id, captain, team_id=team.id)
        assert exc_info.value.status_code == 409


    def test_unique_constraint_conflict_is_409(self, db, make_user, make_tournament):
        creator = make_user()
        player = make_user()
        tournament = make_tournament(creator)
        db.add(TournamentParticipant(
            tournament_id=tournament.id,
            user_id=player.id,
            status=ParticipantStatus.REGISTERED,
            registered_at=datetime.utcnow(),
        ))
        db.commit()

        # Let the insert race past the lookup so the constraint has to catch it
        with patch.object(participant_service, "find_registration", return_value=None):
            with pytest.raises(ApiError) as exc_info:
                participant_service.register_participant(db, tournament.id, player)
        assert exc_info.value.status_code == 409
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_ALREADY_REGISTERED

        # The failed commit was rolled back and the session keeps working
        assert db.query(TournamentParticipant).count() == 1
        assert participant_service.list_participants(db, tournament.id)[0].user_id == player.id


class TestParticipantManagement:

    def test_list_participants_for_unknown_tournament_is_404(self, db):
        with pytest.raises(ApiError) as exc_info:
            participant_service.list_participants(db, 12345)
        assert exc_info.value.status_code == 404

    def test_list_participants_in_registration_order(self, db, make_user, make_tournament):
        creator = make_user()
        tournament = make_tournament(creator)
        first = participant_service.register_participant(db, tournament.id, make_user())
        second = participant_service.register_participant(db, tournament.id, make_user())

        participants = participant_service.list_participants(db, tournament.id)

        assert [p.id for p in participants] == [first.id, second.id]

    def test_creator_updates_status_and_seed(self, db, make_user, make_tournament):
        creator = make_user()
        tournament = make_tournament(creator)
        entry = participant_service.register_participant(db, tournament.id, make_user())

        updated = participant_service.update_participant(
            db,
            entry.id,
            participant_schemas.ParticipantUpdate(status=ParticipantStatus.CONFIRMED, seed=1),
            creator.id,
        )

        assert updated.status == ParticipantStatus.CONFIRMED
        assert updated.seed == 1

    def test_non_creator_cannot_update_participant(self, db, make_user, make_tournament):
        creator = make_user()
        player = make_user()
        tournament = make_tournament(creator)
        entry = participant_service.register_participant(db, tournament.id, player)

        with pytest.raises(ApiError) as exc_info:
            participant_service.update_participant(
                db, entry.id, participant_schemas.ParticipantUpdate(seed=3), player.id
            )
        assert exc_info.value.status_code == 403
        assert exc_info.value.key == ErrorMessageKeys.TOURNAMENT_NOT_OWNER

    def test_update_unknown_participant_is_404(self, db, make_user):
        with pytest.raises(ApiError) as exc_info:
            participant_service.update_participant(
                db, 777, participant_schemas.ParticipantUpdate(seed=1), make_user().id
            )
        assert exc_info.value.status_code == 404

    def test_withdraw_by_other_user_is_403(self, db, make_user, make_tournament):
        creator = make_user()
        player = make_user()
        tournament = make_tournament(creator)
        entry = participant_service.register_participant(db, tournament.id, player)

        # Even the tournament creator may not withdraw someone else
        with pytest.raises(ApiError) as exc_info:
            participant_service.withdraw_participant(db, entry.id, creator.id)
        assert exc_info.value.status_code == 403
        assert exc_info.value.key == ErrorMessageKeys.PARTICIPANT_WITHDRAW_FORBIDDEN

    def test_team_captain_withdraws_team(self, db, make_user, make_tournament):
        creator = make_user()
        captain = make_user()
        team = team_service.create_team(db, team_schemas.TeamCreate(name="Wolves"), captain.id)
        tournament = make_tournament(creator, is_team_based=True)
        entry = participant_service.register_participant(db, tournament.id, captain, team_id=team.id)

        withdrawn = participant_service.withdraw_participant(db, entry.id, captain.id)

        assert withdrawn.status == ParticipantStatus.WITHDREW
        # The row is kept, only its status changes
        assert participant_service.get_participant(db, entry.id) is not None
