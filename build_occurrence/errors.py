class ActionError(Exception):
    """Base error for a failed build occurrence action run."""

class ConfigurationError(ActionError, ValueError):
    """Required input is missing or malformed; raised before any request is sent."""

class ListingError(ActionError):
    pass

class JobNotFoundError(ActionError, LookupError):
    def __init__(self, job_name: str):
        super().__init__(f"unable to find job with id {job_name}")
        self.job_name = job_name

class SubmissionError(ActionError):
    pass
