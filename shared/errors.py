"""
Typed error taxonomy for the tutor service.

Every error carries an HTTP-equivalent status code so the transport layer
in front of this core can map it without inspecting the message.
Domain errors (unknown template, unknown provider) pass through the
orchestrator unchanged; everything else is normalized into a
ProviderRequestFailedError subclass with a provider-agnostic message.
"""

from __future__ import annotations

from typing import Any, Optional


class TutorServiceError(Exception):
    """Base class for all errors raised by this core."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class TemplateNotFoundError(TutorServiceError):
    """Raised when a template id has no registration."""

    status_code = 400

    def __init__(self, template_id: str, **kwargs) -> None:
        super().__init__(
            f"Template not found: {template_id}",
            error_code="TEMPLATE_NOT_FOUND",
            **kwargs,
        )
        self.template_id = template_id


class TemplateValidationError(TutorServiceError):
    """Raised by strict registration when a template fails validation."""

    status_code = 400

    def __init__(self, template_id: str, errors: list[str], **kwargs) -> None:
        super().__init__(
            f"Invalid template '{template_id}': {'; '.join(errors)}",
            error_code="TEMPLATE_INVALID",
            **kwargs,
        )
        self.template_id = template_id
        self.errors = errors


class UnsupportedProviderError(TutorServiceError):
    status_code = 400

    def __init__(self, provider: str, **kwargs) -> None:
        super().__init__(
            f"Unsupported AI provider: {provider}",
            error_code="UNSUPPORTED_PROVIDER",
            **kwargs,
        )
        self.provider = provider


class UnsupportedAnalysisTypeError(TutorServiceError):
    status_code = 400

    def __init__(self, analysis_type: str, **kwargs) -> None:
        super().__init__(
            f"Unsupported analysis type: {analysis_type}",
            error_code="UNSUPPORTED_ANALYSIS_TYPE",
            **kwargs,
        )
        self.analysis_type = analysis_type


class ProviderRequestFailedError(TutorServiceError):
    """
    Upstream completion call failed.

    The message never contains upstream detail; the original exception is
    kept on ``__cause__`` for internal logging only.
    """

    status_code = 500

    def __init__(self, message: str = "Provider request failed", **kwargs) -> None:
        super().__init__(message, error_code="PROVIDER_REQUEST_FAILED", **kwargs)


class AIResponseGenerationError(ProviderRequestFailedError):
    def __init__(self, **kwargs) -> None:
        super().__init__("Failed to generate AI response", **kwargs)
        self.error_code = "AI_RESPONSE_GENERATION_FAILED"


class TextAnalysisError(ProviderRequestFailedError):
    def __init__(self, **kwargs) -> None:
        super().__init__("Failed to analyze text", **kwargs)
        self.error_code = "TEXT_ANALYSIS_FAILED"


class ConfigurationError(TutorServiceError):
    """Raised when service configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)
        self.config_key = config_key


class MissingCredentialError(ConfigurationError):
    """Startup-time fatal: a provider has no API credential configured."""

    def __init__(self, provider: str, config_key: str) -> None:
        super().__init__(
            f"An API key is required for provider '{provider}'. "
            f"Set {config_key} in your environment.",
            config_key=config_key,
        )
        self.error_code = "MISSING_CREDENTIAL"
        self.provider = provider
