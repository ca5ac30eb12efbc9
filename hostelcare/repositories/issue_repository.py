"""
Issue repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelcare.models.base.enums import IssueStatus
from hostelcare.models.issue import Issue
from hostelcare.repositories.base import TenantRepository


class IssueRepository(TenantRepository[Issue]):

    def __init__(self, db: Session, hostel_name: str):
        super().__init__(Issue, db, hostel_name)

    def find_for_room(self, room_no: str) -> List[Issue]:
        return self.find_by_criteria({"room_no": room_no}, order_by=["-created_at"])

    def find_all_newest_first(self) -> List[Issue]:
        return self.find_by_criteria({}, order_by=["-created_at"])

    def count_pending(self, room_no: Optional[str] = None) -> int:
        criteria = {"status": IssueStatus.pending()}
        if room_no is not None:
            criteria["room_no"] = room_no
        return self.count(criteria)

    def recent_pending(self, limit: int = 5) -> List[Issue]:
        return self.find_by_criteria(
            {"status": IssueStatus.pending()}, limit=limit, order_by=["-created_at"]
        )
