import math
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from .collector import collector_base_url
from .errors import ConfigurationError
from .types.occurrence import RunIdentity

DEFAULT_API_URL = "https://api.github.com"
TRUTHY = ("1", "true", "yes", "on")

REQUIRED = (
    "ARTIFACT_ID",
    "BUILD_COLLECTOR_HOST",
    "GITHUB_ACTOR",
    "GITHUB_SHA",
    "GITHUB_JOB",
    "GITHUB_REPOSITORY",
    "GITHUB_RUN_ID",
    "GITHUB_SERVER_URL",
    "GITHUB_TOKEN",
)

@dataclass(frozen=True)
class Settings:
    artifact_id: str
    artifact_names: str
    artifact_names_delimiter: str
    access_token: str = field(repr=False)
    collector_host: str
    collector_insecure: bool
    github_api_url: str
    identity: RunIdentity
    timeout_seconds: Optional[float] = None
    debug: bool = False

def split_slug(slug: str) -> Tuple[str, str]:
    owner, sep, repo = slug.partition("/")
    if not sep or not owner or not repo:
        raise ConfigurationError(f"unable to build config: GITHUB_REPOSITORY must be owner/repo, got {slug!r}")
    return owner, repo

def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in TRUTHY

def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        environ = os.environ

    missing: List[str] = [name for name in REQUIRED if not environ.get(name, "").strip()]
    if missing:
        raise ConfigurationError(f"unable to build config: missing required variables {', '.join(missing)}")

    try:
        run_id = int(environ["GITHUB_RUN_ID"])
    except ValueError:
        raise ConfigurationError(
            f"unable to build config: GITHUB_RUN_ID must be an integer, got {environ['GITHUB_RUN_ID']!r}"
        ) from None

    delimiter = environ.get("ARTIFACT_NAMES_DELIMITER", "\n")
    if delimiter == "":
        raise ConfigurationError("unable to build config: ARTIFACT_NAMES_DELIMITER must not be empty")

    timeout_seconds = None
    raw_timeout = environ.get("ACTION_TIMEOUT_SECONDS", "").strip()
    if raw_timeout:
        try:
            timeout_seconds = float(raw_timeout)
        except ValueError:
            timeout_seconds = -1.0
        if not math.isfinite(timeout_seconds) or timeout_seconds <= 0:
            raise ConfigurationError(
                f"unable to build config: ACTION_TIMEOUT_SECONDS must be a positive number, got {raw_timeout!r}"
            )

    collector_host = environ["BUILD_COLLECTOR_HOST"].strip()
    collector_insecure = _flag(environ, "BUILD_COLLECTOR_INSECURE")
    collector_base_url(collector_host, collector_insecure)

    owner, repo = split_slug(environ["GITHUB_REPOSITORY"].strip())
    identity = RunIdentity(
        owner=owner,
        repo=repo,
        run_id=run_id,
        job_name=environ["GITHUB_JOB"],
        actor=environ["GITHUB_ACTOR"],
        commit_id=environ["GITHUB_SHA"],
        server_url=environ["GITHUB_SERVER_URL"],
        token=environ["GITHUB_TOKEN"],
    )

    return Settings(
        artifact_id=environ["ARTIFACT_ID"],
        artifact_names=environ.get("ARTIFACT_NAMES", ""),
        artifact_names_delimiter=delimiter,
        access_token=environ.get("ACCESS_TOKEN", ""),
        collector_host=collector_host,
        collector_insecure=collector_insecure,
        github_api_url=environ.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL,
        identity=identity,
        timeout_seconds=timeout_seconds,
        debug=_flag(environ, "DEBUG"),
    )
