"""Symbolic message keys returned to clients.

The API never sends human-readable text; clients resolve these keys to
localized strings.
"""

from enum import Enum


class ErrorMessageKeys(str, Enum):
    # Auth
    AUTH_INVALID_CREDENTIALS = "auth.errors.invalidCredentials"
    AUTH_EMAIL_TAKEN = "auth.errors.emailTaken"
    AUTH_UNAUTHORIZED = "auth.errors.unauthorized"
    AUTH_TOKEN_INVALID = "auth.errors.tokenInvalid"
    AUTH_TOKEN_EXPIRED = "auth.errors.tokenExpired"

    # Profile
    INVALID_CURRENT_PASSWORD = "profile.errors.invalidCurrentPassword"

    # Tournaments
    TOURNAMENT_NOT_OWNER = "tournaments.errors.notOwner"

    # Teams
    TEAM_NOT_CAPTAIN = "teams.errors.notCaptain"
    TEAM_ALREADY_MEMBER = "teams.errors.alreadyMember"
    TEAM_MEMBER_NOT_FOUND = "teams.errors.memberNotFound"

    # Participants
    PARTICIPANT_REGISTRATION_NOT_OPEN = "participants.errors.registrationNotOpen"
    PARTICIPANT_TOURNAMENT_FULL = "participants.errors.tournamentFull"
    PARTICIPANT_ALREADY_REGISTERED = "participants.errors.alreadyRegistered"
    PARTICIPANT_TEAM_REQUIRED = "participants.errors.teamRequired"
    PARTICIPANT_INDIVIDUAL_ONLY = "participants.errors.individualOnly"
    PARTICIPANT_WITHDRAW_FORBIDDEN = "participants.errors.withdrawForbidden"

    # Validation
    VALIDATION_FAILED = "validation.failed"
    VALIDATION_REQUIRED = "validation.required"
    VALIDATION_EMAIL_INVALID = "validation.email"
    VALIDATION_MIN_LENGTH = "validation.minLength"
    VALIDATION_MAX_LENGTH = "validation.maxLength"
    VALIDATION_INVALID = "validation.invalid"

    # Generic
    ERROR_GENERIC = "errors.generic"
    ERROR_NOT_FOUND = "errors.notFound"
    ERROR_FORBIDDEN = "errors.forbidden"
    ERROR_SERVER = "errors.server"


class SuccessMessageKeys(str, Enum):
    AUTH_REGISTER_SUCCESS = "auth.register.success"
    AUTH_LOGIN_SUCCESS = "auth.login.success"
    AUTH_LOGOUT_SUCCESS = "auth.logout.success"

    PROFILE_RETRIEVED = "profile.retrieved"
    PROFILE_UPDATED = "profile.updated"
    PASSWORD_CHANGED = "profile.passwordChanged"

    TOURNAMENT_CREATED = "tournaments.created"
    TOURNAMENT_UPDATED = "tournaments.updated"

    TEAM_CREATED = "teams.created"
    TEAM_UPDATED = "teams.updated"
    TEAM_MEMBER_ADDED = "teams.memberAdded"
    TEAM_MEMBER_REMOVED = "teams.memberRemoved"

    PARTICIPANT_REGISTERED = "participants.registered"
    PARTICIPANT_UPDATED = "participants.updated"
    PARTICIPANT_WITHDREW = "participants.withdrew"

    MATCH_CREATED = "matches.created"
    MATCH_UPDATED = "matches.updated"
