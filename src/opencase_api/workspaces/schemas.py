"""Response shapes for workspace reads."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from ..schemas import ApiModel

__all__ = [
    "WorkspaceSummary",
    "WorkspaceDetail",
    "MemberUser",
    "WorkspaceMemberResponse",
]


class WorkspaceSummary(ApiModel):
    """A workspace as listed for one of its members."""

    id: str
    name: str
    slug: str
    role: str
    project_count: int
    created_at: dt.datetime


class WorkspaceDetail(ApiModel):
    id: str
    name: str
    slug: str
    role: str
    created_at: dt.datetime


class MemberUser(ApiModel):
    id: str
    email: str
    name: str
    avatar_url: Optional[str] = None


class WorkspaceMemberResponse(ApiModel):
    id: str
    user_id: str
    role: str
    user: MemberUser
