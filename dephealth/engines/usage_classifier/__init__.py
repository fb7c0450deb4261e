"""Usage classifier engine: static import/require scanning."""

from dephealth.engines.usage_classifier.classifier import classify_usage, python_module_names
from dephealth.engines.usage_classifier.models import UsageRecord

__all__ = ["UsageRecord", "classify_usage", "python_module_names"]
