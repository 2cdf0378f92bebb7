"""issueclass: windowed issue-type classification of merged anomalies."""

__version__ = "0.1.0"
