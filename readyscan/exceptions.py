"""Exceptions raised by the scan engine."""


class ReadyScanError(Exception):
    """Base class for readyscan errors."""


class ScanInputError(ReadyScanError):
    """The scan root is missing, not a directory, or unreadable.

    This is the only error a scan surfaces; per-file problems are absorbed by
    the detectors.
    """

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot scan {target}: {reason}")
