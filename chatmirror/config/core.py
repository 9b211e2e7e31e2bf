import os


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("chatmirror", {})
        discord_cfg = cfg.get("discord", {})
        http_cfg = cfg.get("http", {})

        token_env = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))

        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)

        # 0 means "unknown until the gateway reports ready"
        self.BOT_USER_ID: int = int(discord_cfg.get("bot_user_id") or os.getenv("BOT_USER_ID", "0"))

        self.API_BASE_URL: str = str(
            http_cfg.get("base_url", os.getenv("API_BASE_URL", "https://discord.com/api/v10"))
        ).rstrip("/")
        self.HTTP_TIMEOUT: float = float(http_cfg.get("timeout", os.getenv("HTTP_TIMEOUT", "10")))

        required = [
            ("DISCORD_API_TOKEN", self.DISCORD_API_TOKEN),
        ]
        missing = [name for name, val in required if not val]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")
