import os
from typing import Any, Optional, Tuple

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_PILES = os.getenv("NIMSEARCH_PILES", "1,2,4")
LOG_DIR = os.getenv("NIMSEARCH_LOG_DIR", "logs")
# Kept as text; parse_seed validates it when the settings are resolved
DEFAULT_SEED = os.getenv("NIMSEARCH_SEED") or None


def parse_piles(piles: Any) -> Tuple[int, ...]:
    """Parse pile sizes given as "1,2,4" or as a list such as [1, 2, 4].

    Raises:
        ValueError: If a size is not a non-negative integer or none is given
    """
    if isinstance(piles, (list, tuple)):
        parts = [str(p).strip() for p in piles if not isinstance(p, bool)]
        if len(parts) != len(piles):
            raise ValueError(f"Pile sizes must be non-negative integers, got {list(piles)}")
    else:
        parts = [p.strip() for p in str(piles).split(",") if p.strip()]
    if not parts:
        raise ValueError("At least one pile size is required")
    if not all(p.isdigit() for p in parts):
        raise ValueError(f"Pile sizes must be non-negative integers, got '{piles}'")
    return tuple(int(p) for p in parts)


def parse_seed(seed: Any) -> Optional[int]:
    """Parse the random seed; None or an empty value means unseeded.

    Raises:
        ValueError: If the seed is not an integer
    """
    if seed is None or seed == "":
        return None
    if isinstance(seed, bool):
        raise ValueError(f"Seed must be an integer, got {seed}")
    if isinstance(seed, int):
        return seed
    try:
        return int(str(seed).strip())
    except ValueError:
        raise ValueError(f"Seed must be an integer, got '{seed}'") from None
