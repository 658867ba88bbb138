# The MIT License (MIT)
# Copyright © 2025 Entrius

import os
from typing import FrozenSet, Iterable, Mapping, Optional

from dotenv import load_dotenv

from branchnuker.classes import RunConfig
from branchnuker.constants import (
    DEFAULT_AGE_IN_MONTHS,
    DEFAULT_ALLOWED_BASE_REFS,
    DEFAULT_FORBIDDEN_HEAD_REFS,
    DEFAULT_MAX_COUNT,
    DEFAULT_PER_PAGE_COUNT,
    DEFAULT_RESULTS_PATH,
    REQUIRED_ENV_VARS,
)
from branchnuker.errors import ConfigurationError
from branchnuker.utils.logging import log


def load_env_file(env_file: Optional[str] = None) -> bool:
    """Load a .env file into os.environ without overriding variables already set."""
    if env_file:
        return load_dotenv(env_file, override=False)
    return load_dotenv(os.path.join(os.getcwd(), '.env'), override=False)


def _positive_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning(f"{key}={raw!r} is not an integer, using default {default}")
        return default
    if value <= 0:
        log.warning(f'{key}={value} must be positive, using default {default}')
        return default
    return value


def _ref_set(env: Mapping[str, str], key: str, default: Iterable[str]) -> FrozenSet[str]:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return frozenset(default)
    return frozenset(ref.strip() for ref in raw.split(',') if ref.strip())


def load_run_config(env: Optional[Mapping[str, str]] = None, output_path: Optional[str] = None) -> RunConfig:
    """
    Build the RunConfig from environment variables.

    Args:
        env: Mapping to read from, os.environ when omitted
        output_path: Overrides RESULTS_PATH

    Raises:
        ConfigurationError: if OWNER, REPO or GITHUB_TOKEN is missing or blank
    """
    if env is None:
        env = os.environ

    missing = [key for key in REQUIRED_ENV_VARS if not (env.get(key) or '').strip()]
    if missing:
        raise ConfigurationError(missing)

    return RunConfig(
        owner=env['OWNER'].strip(),
        repo=env['REPO'].strip(),
        token=env['GITHUB_TOKEN'].strip(),
        age_threshold_months=_positive_int(env, 'AGE_IN_MONTHS', DEFAULT_AGE_IN_MONTHS),
        max_candidates=_positive_int(env, 'MAX_COUNT', DEFAULT_MAX_COUNT),
        page_size=_positive_int(env, 'PER_PAGE_COUNT', DEFAULT_PER_PAGE_COUNT),
        forbidden_head_refs=_ref_set(env, 'FORBIDDEN_HEAD_REFS', DEFAULT_FORBIDDEN_HEAD_REFS),
        allowed_base_refs=_ref_set(env, 'ALLOWED_BASE_REFS', DEFAULT_ALLOWED_BASE_REFS),
        output_path=output_path or (env.get('RESULTS_PATH') or '').strip() or DEFAULT_RESULTS_PATH,
    )
