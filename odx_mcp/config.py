import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv

DEFAULT_GATEWAY_URL = "https://gateway.odxproxy.io"
DEFAULT_QUERY_TZ = "Asia/Singapore"
DEFAULT_TIMEOUT = 30.0


@dataclass
class OdxInstanceInfo:
    url: str
    user_id: int
    db: str
    api_key: str


@dataclass
class OdxProxyClientInfo:
    instance: OdxInstanceInfo
    odx_api_key: str
    gateway_url: Optional[str] = None


@dataclass
class Settings:
    """Everything the process reads from its environment."""
    client: OdxProxyClientInfo
    query_tz: str = DEFAULT_QUERY_TZ
    timeout: float = DEFAULT_TIMEOUT
    glossary_path: Optional[str] = None
    glossary_concurrency: Optional[int] = None
    log_level: str = "INFO"
    dry_run: bool = False


def _require(env: Dict[str, str], key: str) -> str:
    value = (env.get(key) or "").strip()
    if not value:
        raise ValueError(f"Missing {key}")
    return value


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_config(env: Optional[Dict[str, str]] = None) -> Settings:
    """Build settings from ``env`` (defaults to ``os.environ`` after reading .env)."""
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    user_id = _require(env, "ODX_USER_ID")
    try:
        user_id = int(user_id)
    except ValueError:
        raise ValueError(f"ODX_USER_ID must be an integer, got {user_id!r}")

    instance = OdxInstanceInfo(
        url=_require(env, "ODX_INSTANCE_URL").rstrip("/"),
        user_id=user_id,
        db=_require(env, "ODX_INSTANCE_DB"),
        api_key=_require(env, "ODX_INSTANCE_API_KEY"),
    )
    client = OdxProxyClientInfo(
        instance=instance,
        odx_api_key=_require(env, "ODX_API_KEY"),
        gateway_url=(env.get("ODX_GATEWAY_URL") or DEFAULT_GATEWAY_URL).rstrip("/"),
    )

    concurrency = (env.get("GLOSSARY_CONCURRENCY") or "").strip() or None
    if concurrency is not None:
        try:
            concurrency = int(concurrency)
        except ValueError:
            concurrency = 0
        if concurrency < 1:
            raise ValueError(f"GLOSSARY_CONCURRENCY must be a positive integer, got {env['GLOSSARY_CONCURRENCY']!r}")

    return Settings(
        client=client,
        query_tz=env.get("ODX_QUERY_TZ") or DEFAULT_QUERY_TZ,
        timeout=float(env.get("REQUEST_TIMEOUT") or DEFAULT_TIMEOUT),
        glossary_path=env.get("GLOSSARY_PATH") or None,
        glossary_concurrency=concurrency,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        dry_run=_flag(env.get("DRY_RUN")),
    )
