from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from apps.bgdump.settings import BgdumpSettings

ENV_PREFIX = "XBG_"
NESTED_DELIMITER = "__"

# --- paths --------------------------------------------------------------------


def _repo_root() -> Path:
    """Heuristic: walk up from this file until we find pyproject.toml."""
    p = Path(__file__).resolve()
    for ancestor in [p, *p.parents]:
        if (ancestor / "pyproject.toml").exists():
            return ancestor
    return Path.cwd()


def _profiles_dir(env: Mapping[str, str]) -> Path:
    # Allow override (useful for tests): XBG_CONFIG_DIR points *at* profiles/
    override = env.get("XBG_CONFIG_DIR")
    if override:
        return Path(override)
    return _repo_root() / "configs" / "profiles"


def _load_profile_table(env: Mapping[str, str], profile: str) -> dict[str, Any]:
    f = _profiles_dir(env) / f"{profile}.toml"
    if not f.exists():
        return {}
    text = f.read_text("utf-8")
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise RuntimeError(f"Failed to parse profile TOML: {f}") from e


def _deep_update(base: dict[str, Any], over: Mapping[str, Any]) -> dict[str, Any]:
    for k, v in over.items():
        if isinstance(v, Mapping) and isinstance(base.get(k), dict):
            _deep_update(base[k], v)
        else:
            base[k] = v
    return base


# --- env overlay helpers ------------------------------------------------------


def _coerce_env_value(raw: str) -> Any:
    """
    Try to parse JSON first (so bools/numbers/null work),
    then fall back to the original string.
    """
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _collect_env_for(
    base: Mapping[str, Any], env: Mapping[str, str], prefix: str = ENV_PREFIX
) -> dict[str, Any]:
    """
    Collect overrides like XBG_LOG_LEVEL, XBG_CAPTURE__MASK_OFFSCREEN
    -> {'log_level': ..., 'capture': {'mask_offscreen': ...}}.
    Case-insensitive; "__" descends into nested sections.
    """
    out: dict[str, Any] = {}
    plen = len(prefix)
    for k, v in env.items():
        if not k.upper().startswith(prefix):
            continue
        path = k[plen:].split(NESTED_DELIMITER)
        fields: Mapping[str, Any] = base
        target = out
        for i, part in enumerate(path):
            upper_to_field = {f.upper(): f for f in fields}
            name = upper_to_field.get(part.upper())
            if name is None:
                break
            if i == len(path) - 1:
                target[name] = _coerce_env_value(v)
            elif isinstance(fields[name], dict):
                fields = fields[name]
                target = target.setdefault(name, {})
            else:
                break
    return out


# --- public API ---------------------------------------------------------------


def load_bgdump_settings(
    env: Mapping[str, str] | None = None, profile: str | None = None
) -> BgdumpSettings:
    """
    Merge defaults (BgdumpSettings) <- TOML [bgdump] <- env XBG_*.
    Env examples: XBG_LOG_LEVEL=DEBUG, XBG_CAPTURE__DISPLAY=":1",
    XBG_CAPTURE__MASK_OFFSCREEN=false, XBG_OUTPUT__PATH=-
    """
    env = os.environ if env is None else env
    profile = (profile or env.get("XBG_PROFILE") or "dev").strip()

    # start from defaults exposed by the model
    base = BgdumpSettings.model_construct().model_dump()

    # TOML overlay
    toml_table = _load_profile_table(env, profile)
    toml_bg = toml_table.get("bgdump", {}) if isinstance(toml_table, dict) else {}
    if isinstance(toml_bg, dict):
        _deep_update(base, toml_bg)

    # env overlay
    _deep_update(base, _collect_env_for(base, env))

    # validate
    return BgdumpSettings.model_validate(base)
