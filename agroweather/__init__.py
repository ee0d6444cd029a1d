"""Farm weather aggregation service: daily forecast summaries, UV and soil-moisture estimates."""

__version__ = "0.1.0"
