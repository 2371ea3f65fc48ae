"""
Solver configuration
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

# Groups with this many tiles or more are too expensive to enumerate
DEFAULT_GROUP_SIZE_LIMIT = 18


@dataclass
class SolverConfig:
    """Tunable settings for the deduction solver"""

    # Below this many unflipped tiles the whole remaining region is one group,
    # and groups of this size or larger are skipped
    group_size_limit: int = DEFAULT_GROUP_SIZE_LIMIT
    # Seed for the random fallback when no random source is given
    seed: Optional[int] = None

    def __post_init__(self):
        if self.group_size_limit < 1:
            raise ValueError("group_size_limit must be at least 1.")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'SolverConfig':
        """Build a config from a mapping, ignoring keys it doesn't know"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})
