"""
Enumerations shared by every stage of the pipeline.

``SourceType`` is the discriminator of the search-result metadata union.
Code that branches on it uses ``match`` with ``assert_never`` so a new
member cannot silently bypass citation building or intent filtering.
"""

from __future__ import annotations

from enum import Enum


class SourceType(Enum):
    """Kinds of indexed Parliament documents."""

    BILL = "bill"
    HANSARD = "hansard"
    VOTE_QUESTION = "vote_question"
    VOTE_PARTY = "vote_party"
    VOTE_MEMBER = "vote_member"
    POLITICIAN = "politician"
    COMMITTEE = "committee"
    COMMITTEE_REPORT = "committee_report"
    COMMITTEE_MEETING = "committee_meeting"
    PARTY = "party"
    ELECTION = "election"
    CANDIDACY = "candidacy"
    SESSION = "session"
    RIDING = "riding"


class Language(Enum):
    """Detected query language."""

    EN = "en"
    FR = "fr"
    UNKNOWN = "unknown"

    @property
    def preferred(self) -> Language:
        """Content language to request: French only when detected as French."""
        return Language.FR if self is Language.FR else Language.EN

    @property
    def other(self) -> Language:
        return Language.EN if self is Language.FR else Language.FR


class PriorityIntent(Enum):
    """
    The single document category the user primarily wants.

    BILL_FOCUSED: "Tell me about Bill C-35", "Did Bill C-18 pass?"
    VOTE_FOCUSED: "How did the NDP vote on C-11?"
    MP_STATEMENT: "What did Poilievre say about housing?"
    MP_INFO: "Who is the MP for Toronto Centre?"
    COMMITTEE_FOCUSED: "Finance Committee report on C-69"
    GENERAL: exploratory or mixed
    """

    BILL_FOCUSED = "bill_focused"
    VOTE_FOCUSED = "vote_focused"
    MP_STATEMENT = "mp_statement"
    MP_INFO = "mp_info"
    COMMITTEE_FOCUSED = "committee_focused"
    GENERAL = "general"


class EnumerationKind(Enum):
    """Families of exhaustive ("list them all") queries."""

    VOTE = "vote"
    POLITICIAN = "politician"
    COMMITTEE = "committee"


class VoteType(Enum):
    """Individual ballot values recorded for a member."""

    YEA = "Y"
    NAY = "N"
    ABSTAIN = "A"
    PAIRED = "P"

    def label(self, language: Language) -> str:
        french = language is Language.FR
        match self:
            case VoteType.YEA:
                return "Pour" if french else "Yea"
            case VoteType.NAY:
                return "Contre" if french else "Nay"
            case VoteType.ABSTAIN:
                return "Abstention" if french else "Abstain"
            case VoteType.PAIRED:
                return "Jumelé" if french else "Paired"


class PartySlug(Enum):
    """Party identifiers accepted by the structured store."""

    LIBERAL = "liberal"
    CONSERVATIVE = "conservative"
    NDP = "ndp"
    BQ = "bq"
    GREEN = "green"
    INDEPENDENT = "independent"


def format_vote_result(result: str | None, language: Language) -> str:
    """Render a vote question outcome code ("Y"/"N") for display."""
    french = language is Language.FR
    if result == "Y":
        return "Adopté" if french else "Passed"
    if result == "N":
        return "Rejeté" if french else "Failed"
    return result or ""
