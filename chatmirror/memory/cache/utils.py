def _describe(entity) -> str:
    """Return a compact one-line label for logs: e.g., channel 123 '#general'."""
    kind = type(entity).__name__.lower()
    ident = getattr(entity, "id", None)
    name = getattr(entity, "name", None) or getattr(entity, "username", None)
    if ident is None:
        return kind
    return f"{kind} {ident} '{name}'" if name else f"{kind} {ident}"
