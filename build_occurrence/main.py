import asyncio
import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from .action import CreateBuildOccurrenceAction
from .collector import BuildCollectorClient
from .config import Settings, load_settings
from .errors import ActionError
from .github import GitHubClient
from .outputs import fatal, set_output_variable

async def run_action(settings: Settings) -> str:
    gh = GitHubClient(settings.identity.token, base_url=settings.github_api_url)
    collector = BuildCollectorClient(
        settings.collector_host,
        insecure=settings.collector_insecure,
        access_token=settings.access_token,
    )
    action = CreateBuildOccurrenceAction(settings, gh, collector)
    try:
        if settings.timeout_seconds:
            return await asyncio.wait_for(action.run(), timeout=settings.timeout_seconds)
        return await action.run()
    finally:
        await gh.close()
        await collector.close()

def main(environ: Optional[Mapping[str, str]] = None) -> None:
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    try:
        settings = load_settings(environ)
    except ActionError as e:
        fatal(str(e))

    try:
        occurrence_id = asyncio.run(run_action(settings))
    except ActionError as e:
        fatal(str(e))
    except asyncio.TimeoutError:
        fatal(f"action did not finish within {settings.timeout_seconds} seconds")

    set_output_variable("id", occurrence_id, environ)

if __name__ == "__main__":
    main()
