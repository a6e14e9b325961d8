"""
Processes prontos do DagFlow, baseados em pandas.

Estes Processes são implementações comuns do protocolo `Process`; o core
não depende deles nem inspeciona os DataFrames que trafegam no Flow.
"""

from .io import CsvSink, CsvSource
from .transform import ConcatFrames, FilterRows, JoinFrames, SelectColumns

__all__ = [
    "CsvSink",
    "CsvSource",
    "ConcatFrames",
    "FilterRows",
    "JoinFrames",
    "SelectColumns",
]
