"""
Custom Exceptions
Error taxonomy for article retrieval, question answering and local storage.
"""


class ReaderError(Exception):
    """Base class for all reader errors"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ReaderError):
    """Missing or invalid configuration"""
    pass


class InvalidURLError(ReaderError):
    """The article URL cannot be used"""
    pass


class LLMError(ReaderError):
    """LLM call error"""

    def __init__(self, message: str, provider: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.provider = provider


class GenerationFailure(LLMError):
    """
    No usable article text could be obtained.

    kind:
    - exhausted: every model tier raised
    - empty: the service answered without any text
    - abnormal: generation stopped for a non-policy reason (max tokens, other)
    """

    EXHAUSTED = "exhausted"
    EMPTY = "empty"
    ABNORMAL = "abnormal"

    def __init__(self, message: str, kind: str = EXHAUSTED, model: str = None, **kwargs):
        super().__init__(message, provider=kwargs.pop("provider", None), **kwargs)
        self.kind = kind
        self.model = model


class ContentBlocked(LLMError):
    """The generative service declined to produce content for policy reasons"""

    SAFETY = "safety"
    COPYRIGHT = "copyright"

    _REASONS = {
        SAFETY: "The article was blocked by the model's safety filters.",
        COPYRIGHT: "The article could not be reproduced because of copyright restrictions.",
    }

    def __init__(self, kind: str, message: str = None, model: str = None, **kwargs):
        super().__init__(message or self._REASONS.get(kind, "Content was blocked."), **kwargs)
        self.kind = kind
        self.model = model

    @property
    def reason(self) -> str:
        """Human-readable reason shown to the reader"""
        return self._REASONS.get(self.kind, self.message)


class AnswerFailure(LLMError):
    """Question answering failed (never propagated past the chat agent)"""
    pass


class StorageError(ReaderError):
    """Storage error"""
    pass


class HistoryError(StorageError):
    """Reading history could not be read or written"""
    pass
