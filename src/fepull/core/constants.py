#!/usr/bin/env python3
"""
Constants for the fepull Core Layer

This module defines constants used throughout the source-fetch pipeline,
ensuring consistent git transport settings, branch fallbacks and file names.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- None (module contains only constants)

Expected output:
- None (module contains only constants)
"""

from typing import Dict, Tuple

# Git transport tuning applied before any network operation
TRANSPORT_SETTINGS: Dict[str, str] = {
    "http.postBuffer": "524288000",  # 500 MB
    "http.version": "HTTP/1.1",
    "http.lowSpeedLimit": "1000",  # bytes/sec
    "http.lowSpeedTime": "30",  # seconds below the limit before aborting
}

# Default branch names tried in order when resolving a fresh shallow fetch
COMMON_BRANCHES: Tuple[str, ...] = ("main", "master", "develop")

REMOTE_NAME = "origin"
FETCH_DEPTH = 1

# Per git subprocess call, in seconds
DEFAULT_GIT_TIMEOUT: float = 30.0

# Retry settings for the fetch step
DEFAULT_FETCH_ATTEMPTS = 3
DEFAULT_RETRY_BASE_DELAY: float = 1.0

# Maximum number of source groups fetched at the same time
DEFAULT_CONCURRENCY = 4

# Scratch workspaces are created under the working directory with this prefix
WORKSPACE_PREFIX = ".fepull-temp-"

# Manifest read from each package to pick up its description
MANIFEST_FILE = "package.json"

CONFIG_FILE = "fepull.config.yml"
