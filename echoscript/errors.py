"""Error taxonomy for the capture → transcribe → parse pipeline."""


class EchoScriptError(Exception):
    """Base class for every error raised by the pipeline."""


class ValidationError(EchoScriptError):
    """Captured input was rejected. The message is safe to show to the user."""


class ConfigurationError(EchoScriptError):
    """A required credential is missing. Raised before any network attempt."""


class TransportError(EchoScriptError):
    """The inference service failed, was unreachable, or returned no text."""


class MalformedResponseError(EchoScriptError):
    """The service returned text that is not a valid transcript.

    Only raised inside the response parser, which recovers from it.
    """
