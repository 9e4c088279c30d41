"""Strongly typed identifiers for IntraLink domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
TenantId = NewType("TenantId", UUID)  # A college
ProjectId = NewType("ProjectId", UUID)
RequestId = NewType("RequestId", UUID)
FeedbackId = NewType("FeedbackId", UUID)
