import os


def _as_bool(raw) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).lower() in ("1", "true", "yes")


class Cache:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("chatmirror", {}).get("cache", {})

        # Serialize concurrent fetches of the same key instead of letting
        # duplicate requests race (last write wins).
        self.SERIALIZE_FETCHES: bool = _as_bool(
            cfg.get("serialize_fetches", os.getenv("SERIALIZE_FETCHES", "1"))
        )
