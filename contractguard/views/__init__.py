"""
View state for the three user-facing steps: contract input, email capture
and results.
"""

from .contract_input import ContractInputForm, InputMode, PdfUpload
from .email_capture import EmailCaptureForm
from .results import ResultsView

__all__ = [
    "ContractInputForm",
    "InputMode",
    "PdfUpload",
    "EmailCaptureForm",
    "ResultsView",
]
