from typing import Any, Dict, List

from ..errors import JobNotFoundError, ListingError
from ..types.occurrence import JobLister, WorkflowJob, parse_timestamp

def job_from_payload(job: Dict[str, Any]) -> WorkflowJob:
    return WorkflowJob(
        id=int(job.get("id") or 0),
        name=job.get("name") or "",
        started_at=parse_timestamp(job.get("started_at")),
        html_url=job.get("html_url") or "",
    )

async def find_job(github: JobLister, owner: str, repo: str, run_id: int, job_name: str) -> WorkflowJob:
    print(f"[jobs] fetching jobs for workflow run {run_id} in {owner}/{repo}")
    try:
        data = await github.list_jobs_for_workflow_run(owner, repo, run_id)
    except Exception as e:
        raise ListingError(f"error listing jobs: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ListingError(f"error listing jobs: unexpected response of type {type(data).__name__}")

    jobs: List[Dict[str, Any]] = (data or {}).get("jobs") or []
    for job in jobs:
        # exact, case-sensitive; first match wins
        if isinstance(job, dict) and job.get("name") == job_name:
            try:
                return job_from_payload(job)
            except (TypeError, ValueError) as e:
                raise ListingError(f"error listing jobs: malformed job {job_name}: {e}") from e

    raise JobNotFoundError(job_name)
