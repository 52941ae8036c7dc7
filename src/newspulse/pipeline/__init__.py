from newspulse.pipeline.base import Pipeline
from newspulse.pipeline.orchestrator import PipelineState, RunTracker, SentimentPipeline

__all__ = ["Pipeline", "PipelineState", "RunTracker", "SentimentPipeline"]
