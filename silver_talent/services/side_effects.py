# silver_talent/services/side_effects.py
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass
class SideEffectOutcome:
    name: str
    ok: bool
    error: Optional[str] = None


def run_side_effects(effects: Sequence[Tuple[str, Callable[[], Any]]]) -> List[SideEffectOutcome]:
    """
    Run best-effort work that follows a committed primary write (emails,
    media cleanup). Each effect is isolated: a failure is logged and recorded,
    never raised, and does not stop the remaining effects.
    """
    outcomes = []
    for name, effect in effects:
        try:
            effect()
        except Exception as e:
            logger.error(f"Side effect '{name}' failed: {e}")
            outcomes.append(SideEffectOutcome(name=name, ok=False, error=str(e)))
        else:
            logger.info(f"Side effect '{name}' completed")
            outcomes.append(SideEffectOutcome(name=name, ok=True))
    return outcomes
