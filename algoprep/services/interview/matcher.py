"""
Tiered problem matching for interview creation.

The tiers are an ordered rule list. Each tier runs only while the current
match count is below its threshold, and either replaces the current matches
or extends them:

1. difficulty matches AND topics intersect           (replace, below 3)
2. topics intersect, any difficulty                  (replace, below 3)
3. + problems sharing a pattern with tier-2 problems (extend,  below 3)
4. difficulty matches                                (replace, below 1)
5. first five problems of the store                  (replace, below 1)
"""
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

FULL_SET = 3
LAST_RESORT_LIMIT = 5


@dataclass(frozen=True)
class Candidate:
    id: str
    title: str
    description: str
    difficulty: str
    topic_ids: FrozenSet[str] = field(default_factory=frozenset)
    pattern_ids: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class MatchRequest:
    difficulty: str
    topics: FrozenSet[str]

    def hits_topic(self, c: Candidate) -> bool:
        return not self.topics.isdisjoint(c.topic_ids)


Selector = Callable[[MatchRequest, Sequence[Candidate]], List[Candidate]]


@dataclass(frozen=True)
class MatchTier:
    name: str
    below: int  # consulted only while len(matches) < below
    extend: bool
    select: Selector


def _difficulty_and_topic(req: MatchRequest, store: Sequence[Candidate]) -> List[Candidate]:
    return [c for c in store if c.difficulty == req.difficulty and req.hits_topic(c)]


def _topic_only(req: MatchRequest, store: Sequence[Candidate]) -> List[Candidate]:
    return [c for c in store if req.hits_topic(c)]


def _shared_pattern(req: MatchRequest, store: Sequence[Candidate]) -> List[Candidate]:
    related = set()
    for c in store:
        if req.hits_topic(c):
            related.update(c.pattern_ids)

    return [
        c for c in store
        if not req.hits_topic(c) and not related.isdisjoint(c.pattern_ids)
    ]


def _difficulty_only(req: MatchRequest, store: Sequence[Candidate]) -> List[Candidate]:
    return [c for c in store if c.difficulty == req.difficulty]


def _first_in_store(req: MatchRequest, store: Sequence[Candidate]) -> List[Candidate]:
    return list(store[:LAST_RESORT_LIMIT])


TIERS: Tuple[MatchTier, ...] = (
    MatchTier("difficulty+topic", FULL_SET, False, _difficulty_and_topic),
    MatchTier("topic", FULL_SET, False, _topic_only),
    MatchTier("shared-pattern", FULL_SET, True, _shared_pattern),
    MatchTier("difficulty", 1, False, _difficulty_only),
    MatchTier("any", 1, False, _first_in_store),
)


def match_problems(
    req: MatchRequest,
    store: Sequence[Candidate],
    tiers: Sequence[MatchTier] = TIERS,
) -> List[Candidate]:
    """Run the tiers in order over `store` (newest first) and return the pool."""
    matches: List[Candidate] = []
    for tier in tiers:
        if len(matches) >= tier.below:
            continue
        found = tier.select(req, store)
        matches = matches + found if tier.extend else found
        logger.debug("[MATCHER] tier=%s found=%d pool=%d", tier.name, len(found), len(matches))
    return matches


def pick_count(pool_size: int, rng: random.Random) -> int:
    # a full set whenever the pool allows it, otherwise 1..pool_size at random
    if pool_size <= 0:
        return 0
    if pool_size >= FULL_SET:
        return FULL_SET
    return max(1, min(pool_size, math.ceil(rng.random() * pool_size)))


def select_problems(
    pool: Sequence[Candidate],
    rng: Optional[random.Random] = None,
) -> List[Candidate]:
    rng = rng or random.Random()
    shuffled = list(pool)
    rng.shuffle(shuffled)
    return shuffled[:pick_count(len(shuffled), rng)]
