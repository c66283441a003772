from __future__ import annotations

from typing import Optional, Protocol

from splitpay.logging import get_logger
from splitpay.models import GroupSnapshot
from splitpay.services.summary import GroupSummary, summarize


class GroupStore(Protocol):
    async def load_snapshot(self, group_id: str) -> Optional[GroupSnapshot]: ...


class GroupNotFound(LookupError):
    pass


async def summarize_group(store: GroupStore, group_id: str, viewer: str) -> GroupSummary:
    snapshot = await store.load_snapshot(group_id)
    if snapshot is None:
        raise GroupNotFound(f"group {group_id} not found")
    get_logger(__name__).info("group.summarize", group_id=group_id, participants=len(snapshot.participants))
    return summarize(snapshot, viewer)
