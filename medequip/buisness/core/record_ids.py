import random
from typing import Collection as SizedCollection


def random_record_id(prefix: str, width: int = 4) -> str:
    """Prefix plus a random zero-padded number, e.g. 'EQ-0042'"""
    return f"{prefix}-{random.randint(0, 10 ** width - 1):0{width}d}"


def unused_record_id(prefix: str, existing_ids: SizedCollection, width: int = 4) -> str:
    """Draw random ids until one is not among existing_ids"""
    if len(existing_ids) >= 10 ** width:
        width += 1
    while True:
        candidate = random_record_id(prefix, width)
        if candidate not in existing_ids:
            return candidate
