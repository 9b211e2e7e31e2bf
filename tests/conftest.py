import os, sys
import warnings
from pathlib import Path

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Ensure required environment variables for config validation
os.environ.setdefault("DISCORD_API_TOKEN", "test-token")
os.environ.setdefault("BOT_USER_ID", "1")


def pytest_configure(config):
    # discord.py imports audioop for voice support; not relevant here
    warnings.filterwarnings(
        "ignore", category=DeprecationWarning, module=r"^discord\.player$"
    )
    warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)
