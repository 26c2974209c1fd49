"""
Environment variable loading utility

Supports layered environment variable loading:
1. Load .env (default/base configuration)
2. Load .env.test or .env.prod based on RUN_ENV variable (overrides .env)
"""
import os
from pathlib import Path

import environ

# RUN_ENV value -> override file name
ENV_OVERRIDE_FILES = {
    "test": ".env.test",
    "prod": ".env.prod",
}


def get_run_env() -> str:
    """
    Get the running environment name, lowercased, empty string if not set
    """
    return os.environ.get("RUN_ENV", "").lower()


def load_env(base_dir: Path) -> environ.Env:
    """
    Load environment variables with layered support

    Loading order:
    1. Load .env (base/default configuration)
    2. If RUN_ENV=test, load .env.test (overrides .env)
    3. If RUN_ENV=prod, load .env.prod (overrides .env)

    Variables already present in the process environment win over .env,
    but the override files win over both.

    Args:
        base_dir: Base directory where .env files are located

    Returns:
        environ.Env instance with loaded environment variables
    """
    env_file = base_dir / ".env"
    if env_file.exists():
        environ.Env.read_env(env_file)

    override_name = ENV_OVERRIDE_FILES.get(get_run_env())
    if override_name:
        override_file = base_dir / override_name
        if override_file.exists():
            environ.Env.read_env(override_file, overwrite=True)

    return environ.Env()
