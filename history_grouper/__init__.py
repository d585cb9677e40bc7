"""history-grouper: regroup a JSONL interaction history by project and session."""

__version__ = "0.1.0"
