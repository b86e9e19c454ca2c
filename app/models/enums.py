from enum import Enum


class EventType(str, Enum):
    TOURNAMENT = "tournament"
    MATCH = "match"


class MatchFormat(str, Enum):
    GI = "gi"
    NO_GI = "no_gi"
    BOTH = "both"


class AgeCategory(str, Enum):
    KIDS = "kids"
    NORMAL = "normal"
    MASTERS = "masters"


class MatchStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MatchResult(str, Enum):
    COMPETITOR_1_WIN = "competitor_1_win"
    COMPETITOR_2_WIN = "competitor_2_win"
    DRAW = "draw"


class CompetitorType(str, Enum):
    REGISTERED_USER = "registered_user"
    MANUAL_ENTRY = "manual_entry"


class MatchRequestType(str, Enum):
    REQUEST = "request" # user asked for the slot
    INVITE = "invite" # organizer offered the slot


class MatchRequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    def can_transition_to(self, target: "MatchRequestStatus") -> bool:
        return target in REQUEST_TRANSITIONS[self]


REQUEST_TRANSITIONS = {
    MatchRequestStatus.PENDING: {
        MatchRequestStatus.ACCEPTED,
        MatchRequestStatus.REJECTED,
        MatchRequestStatus.WITHDRAWN,
    },
    # Reopening a closed request puts it back in the queue
    MatchRequestStatus.REJECTED: {MatchRequestStatus.PENDING},
    MatchRequestStatus.WITHDRAWN: {MatchRequestStatus.PENDING},
    MatchRequestStatus.ACCEPTED: set(),
}


class WithdrawalReason(str, Enum):
    INJURY = "injury"
    ILLNESS = "illness"
    SCHEDULING = "scheduling"
    PERSONAL = "personal"
    OTHER = "other"
