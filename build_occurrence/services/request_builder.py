from datetime import datetime, timezone
from typing import List, Optional

from ..types.occurrence import Artifact, BuildOccurrenceRequest, RunIdentity, WorkflowJob

def split_artifact_names(names: str, delimiter: str) -> List[str]:
    if not names:
        return []
    return [n.strip() for n in names.split(delimiter) if n.strip()]

def build_artifact(artifact_id: str, names: str, delimiter: str) -> Artifact:
    return Artifact(id=artifact_id, names=split_artifact_names(names, delimiter))

def build_request(
    identity: RunIdentity,
    job: WorkflowJob,
    artifact: Artifact,
    now: Optional[datetime] = None,
) -> BuildOccurrenceRequest:
    repo_uri = f"{identity.server_url}/{identity.slug}"
    commit_uri = f"{repo_uri}/commit/{identity.commit_id}"
    logs_uri = f"{commit_uri}/checks/{job.id}/logs"

    build_start = job.started_at.astimezone(timezone.utc) if job.started_at else None
    # build end is the moment of reporting, not the job's upstream completion time
    build_end = now or datetime.now(timezone.utc)

    return BuildOccurrenceRequest(
        artifacts=[artifact],
        build_start=build_start,
        build_end=build_end,
        commit_id=identity.commit_id,
        commit_uri=commit_uri,
        creator=identity.actor,
        logs_uri=logs_uri,
        provenance_id=job.html_url,
        repository=repo_uri,
    )
