"""
Result aggregation: merge stage findings and count them by type.
"""

from typing import Iterable

from ccda_validation.models.findings import Finding
from ccda_validation.models.results import ResultMetadata
from ccda_validation.validation.stages import StageSucceeded


class ResultAggregator:
    """
    Merges the findings of every stage that ran, in execution order.

    The aggregate does not record which stages ran; a skipped stage is
    indistinguishable from one that reported nothing.
    """

    def aggregate(
        self,
        outcomes: Iterable[StageSucceeded],
        validation_objective: str,
    ) -> tuple[list[Finding], ResultMetadata]:
        """
        Build the ResultSet and its metadata.

        Args:
            outcomes: Successful stage outcomes in execution order
            validation_objective: Objective echoed back as the document type

        Returns:
            Tuple of (merged findings, metadata with per-type counts)
        """
        results: list[Finding] = []
        metadata = ResultMetadata(ccda_document_type=validation_objective)

        for outcome in outcomes:
            for finding in outcome.findings:
                results.append(finding)
                metadata.add_count(finding.type)

        return results, metadata
