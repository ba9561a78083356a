from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def dedupe_ids(ids) -> list[int]:
    """Drop repeated ids while keeping first-seen order."""
    seen = set()
    result = []
    for value in ids:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
