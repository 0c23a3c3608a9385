"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Chooses one survivor per hash group and marks every other member for deletion.

Policies (SurvivorPolicy):
- FIRST_SEEN    : keep the first member in insertion order. The scanner returns paths
                  sorted, so this is the lexicographically earliest path. Default.
- SHORTEST_PATH : fewest path components, then shortest path string
- NEWEST        : most recent modification time
- OLDEST        : oldest modification time
Ties are always broken by insertion order (stable sort), so every policy is deterministic.
"""
import logging
from typing import List, Callable, Any, Optional

from ecoclean.core.interfaces import DuplicateResolver
from ecoclean.core.models import FileRecord, HashGroups, Resolution, SurvivorPolicy

logger = logging.getLogger(__name__)


def _mtime_or_zero(record: FileRecord) -> float:
    try:
        return record.mtime
    except OSError:
        return 0.0


class DuplicateResolverImpl(DuplicateResolver):

    def __init__(self, policy: SurvivorPolicy = SurvivorPolicy.FIRST_SEEN):
        self.policy = policy

    def resolve(self, groups: HashGroups) -> Resolution:
        resolution = Resolution()
        for digest, members in groups.items():
            if not members:
                continue
            ordered = self.order_members(members)
            resolution.survivors.append(ordered[0])
            resolution.to_delete.extend(ordered[1:])
            if len(ordered) > 1:
                logger.debug(f"{digest[:12]}..: keeping {ordered[0].path}, {len(ordered) - 1} duplicate(s)")
        return resolution

    def order_members(self, members: List[FileRecord]) -> List[FileRecord]:
        """Members in survivor-first order for the configured policy."""
        key_func = self._sort_key()
        if key_func is None:
            return list(members)
        return sorted(members, key=key_func)

    def _sort_key(self) -> Optional[Callable[[FileRecord], Any]]:
        if self.policy == SurvivorPolicy.SHORTEST_PATH:
            return lambda r: (r.path_depth, len(r.path))
        if self.policy == SurvivorPolicy.NEWEST:
            return lambda r: -_mtime_or_zero(r)
        if self.policy == SurvivorPolicy.OLDEST:
            return _mtime_or_zero
        return None
