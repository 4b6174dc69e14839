"""Transaction formatter: ExtractionResult to FormattedTransaction."""

import logging
from decimal import Decimal
from typing import Optional

from smsledger.domain.classifier import CategoryClassifier
from smsledger.domain.entities import (
    EXPENSE,
    ExtractionResult,
    FormattedTransaction,
)

logger = logging.getLogger(__name__)

RECLASSIFY_THRESHOLD = 90
CLASSIFIER_OVERRIDE_CONFIDENCE = 0.5


class TransactionFormatter:
    """Normalizes extraction results into signed, categorized candidates."""

    def __init__(
        self,
        classifier: Optional[CategoryClassifier] = None,
        reclassify_threshold: int = RECLASSIFY_THRESHOLD,
    ):
        """Initialize transaction formatter.

        Args:
            classifier: Classifier consulted for weak extractions (None disables it)
            reclassify_threshold: Extractions below this confidence are re-classified
        """
        self.classifier = classifier
        self.reclassify_threshold = reclassify_threshold

    def format(
        self, extraction: Optional[ExtractionResult], account_id: Optional[str]
    ) -> Optional[FormattedTransaction]:
        """Format an extraction for the pending queue.

        Args:
            extraction: Extraction result (None passes through)
            account_id: Resolved account ID

        Returns:
            FormattedTransaction, or None if extraction is None
        """
        if extraction is None:
            return None

        category = extraction.category
        category_confidence = 1.0 if extraction.confidence >= 100 else 0.0

        if self.classifier is not None and extraction.confidence < self.reclassify_threshold:
            prediction = self.classifier.predict(
                extraction.merchant or extraction.description, extraction.amount
            )
            if prediction.confidence > CLASSIFIER_OVERRIDE_CONFIDENCE:
                logger.debug(
                    "Classifier replaced category '%s' with '%s'", category, prediction.category
                )
                category = prediction.category
                category_confidence = prediction.confidence

        # Rule matches without a detectable amount are left for the user to fill in
        magnitude = abs(extraction.amount) if extraction.amount is not None else Decimal("0")
        amount = -magnitude if extraction.type == EXPENSE and magnitude else magnitude

        description = extraction.description or (
            "Payment" if extraction.type == EXPENSE else "Credit"
        )

        return FormattedTransaction(
            date=extraction.date,
            description=description,
            amount=amount,
            category=category,
            account_id=account_id,
            type=extraction.type,
            confidence=extraction.confidence,
            category_confidence=category_confidence,
            bank_name=extraction.bank_name,
            raw_text=extraction.raw_text,
        )
