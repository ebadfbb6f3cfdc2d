import json

from .config import Settings
from .errors import SubmissionError
from .services.job_resolver import find_job
from .services.request_builder import build_artifact, build_request
from .types.occurrence import BuildCollector, JobLister

class CreateBuildOccurrenceAction:
    def __init__(self, settings: Settings, github: JobLister, collector: BuildCollector):
        self._settings = settings
        self._github = github
        self._collector = collector

    async def run(self) -> str:
        identity = self._settings.identity
        job = await find_job(
            self._github,
            identity.owner,
            identity.repo,
            identity.run_id,
            identity.job_name,
        )

        artifact = build_artifact(
            self._settings.artifact_id,
            self._settings.artifact_names,
            self._settings.artifact_names_delimiter,
        )
        request = build_request(identity, job, artifact)

        print("[collector] sending request to build collector")
        if self._settings.debug:
            print(f"[collector] request: {json.dumps(request.to_payload())}")

        try:
            occurrence_id = await self._collector.create_build(request)
        except Exception as e:
            raise SubmissionError(f"error creating build occurrence: {e}") from e

        if not occurrence_id:
            raise SubmissionError("error creating build occurrence: collector returned an empty occurrence id")

        print(f"[action] successfully created build occurrence, id is {occurrence_id}")
        return occurrence_id
