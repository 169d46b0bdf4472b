from dataclasses import dataclass, field
from typing import Any, List


@dataclass(slots=True)
class Barrier:
    """A logical wait point. Completes once ``elapsed`` reaches its Duration."""
    kind: str  # 'swap' | 'revert' | 'fall'
    items: List[Any] = field(default_factory=list)
    elapsed: float = 0.0
