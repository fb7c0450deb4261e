"""Vulnerability aggregator engine: advisories from the ecosystem audit tool."""

from dephealth.engines.vuln_aggregator.audit import VulnerabilityAggregator, parse_npm_audit
from dephealth.engines.vuln_aggregator.models import Vulnerability, VulnerabilityFix

__all__ = ["Vulnerability", "VulnerabilityAggregator", "VulnerabilityFix", "parse_npm_audit"]
