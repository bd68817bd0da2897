"""Recognizer cascade."""

from .asian_name import AsianNameRecognizer
from .base import Recognizer
from .date_time import DateTimeRecognizer
from .foreign_name import ForeignNameRecognizer
from .nature import NatureRecognizer
from .number import NumberRecognizer
from .organization import OrganizationRecognizer

__all__ = [
    "Recognizer",
    "NumberRecognizer",
    "AsianNameRecognizer",
    "OrganizationRecognizer",
    "ForeignNameRecognizer",
    "DateTimeRecognizer",
    "NatureRecognizer",
]
