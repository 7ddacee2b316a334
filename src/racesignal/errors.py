"""
Error taxonomy for the inference boundary
"""


class InferenceError(Exception):
    """Base class for a failed analysis call"""


class TransportError(InferenceError):
    """Network or service failure: timeout, bad status, transport error"""


class MalformedResponseError(InferenceError):
    """The service replied but the payload does not match the prediction shape"""
