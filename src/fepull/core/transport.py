"""
Git transport configuration.

Raises the HTTP post buffer, pins HTTP/1.1 and sets a low-speed abort window
so large or slow transfers over HTTP(S) remotes do not fail spuriously.
"""

from loguru import logger

from fepull.core.constants import TRANSPORT_SETTINGS
from fepull.core.git_client import GitClient


async def configure_transport(git: GitClient) -> None:
    """Apply TRANSPORT_SETTINGS to the repository behind ``git``."""
    for key, value in TRANSPORT_SETTINGS.items():
        await git.set_config(key, value)
    logger.debug(f"Applied {len(TRANSPORT_SETTINGS)} transport settings in {git.base_dir}")
