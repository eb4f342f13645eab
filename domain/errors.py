"""Error kinds raised by intake, the analysis pipeline and the LLM client.

Each class carries the HTTP status the API answers with; the message is
user-facing and ends up in the ``detail`` field of the response.
"""


class CVMatcherError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# input validation

class MissingInputError(CVMatcherError):
    status_code = 400


class SessionNotFoundError(CVMatcherError):
    status_code = 404


class SessionBusyError(CVMatcherError):
    status_code = 409


class ResultNotAvailableError(CVMatcherError):
    status_code = 404


# extraction

class UnsupportedFileTypeError(CVMatcherError):
    status_code = 415


class ExtractionError(CVMatcherError):
    status_code = 422


# remote call

class LLMError(CVMatcherError):
    status_code = 502


class LLMHTTPError(LLMError):
    def __init__(self, message: str, upstream_status: int):
        super().__init__(message)
        self.upstream_status = upstream_status


class LLMTransportError(LLMError):
    pass


class LLMResponseParseError(LLMError):
    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class InvalidTransitionError(CVMatcherError):
    pass
