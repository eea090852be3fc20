from .checkin import SmartyCheckin, ScoreCategory, CheckinStatus
from .badge import UserBadge

__all__ = [
    "SmartyCheckin",
    "ScoreCategory",
    "CheckinStatus",
    "UserBadge",
]
