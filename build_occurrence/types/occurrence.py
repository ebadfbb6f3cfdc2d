from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

@dataclass(frozen=True)
class RunIdentity:
    owner: str
    repo: str
    run_id: int
    job_name: str
    actor: str
    commit_id: str
    server_url: str
    token: str = field(repr=False)

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

@dataclass(frozen=True)
class WorkflowJob:
    id: int
    name: str
    started_at: Optional[datetime]
    html_url: str

@dataclass(frozen=True)
class Artifact:
    id: str
    names: List[str] = field(default_factory=list)

@dataclass(frozen=True)
class BuildOccurrenceRequest:
    artifacts: List[Artifact]
    build_start: Optional[datetime]
    build_end: datetime
    commit_id: str
    commit_uri: str
    creator: str
    logs_uri: str
    provenance_id: str
    repository: str

    def to_payload(self) -> Dict[str, Any]:
        # field names follow the collector's JSON mapping of CreateBuildRequest
        payload: Dict[str, Any] = {
            "repository": self.repository,
            "artifacts": [{"id": a.id, "names": list(a.names)} for a in self.artifacts],
            "commitId": self.commit_id,
            "commitUri": self.commit_uri,
            "provenanceId": self.provenance_id,
            "logsUri": self.logs_uri,
            "creator": self.creator,
            "buildEnd": format_timestamp(self.build_end),
        }
        if self.build_start is not None:
            payload["buildStart"] = format_timestamp(self.build_start)
        return payload

def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

class JobLister(Protocol):
    async def list_jobs_for_workflow_run(self, owner: str, repo: str, run_id: int) -> Dict[str, Any]:
        ...

class BuildCollector(Protocol):
    async def create_build(self, request: BuildOccurrenceRequest) -> str:
        ...
