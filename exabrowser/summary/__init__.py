"""AI-generated thematic summaries of entity mentions."""

from exabrowser.summary.summarizer import MentionSummarizer, MentionSummary, flatten_results

__all__ = ["MentionSummarizer", "MentionSummary", "flatten_results"]
