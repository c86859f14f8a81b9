from .output_capture import OutputBuffer, capture_output, read_buffer
from .run import ReportRun

__all__ = [
    "OutputBuffer",
    "ReportRun",
    "capture_output",
    "read_buffer",
]
