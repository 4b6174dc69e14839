"""Category classifier with a learned description mapping."""

import logging
from decimal import Decimal
from typing import Optional

from smsledger.database.base import Database
from smsledger.domain.entities import (
    CategoryPrediction,
    ClassifierModel,
    DEFAULT_CATEGORY,
)
from smsledger.domain.errors import PersistenceError
from smsledger.domain.observable import Observable

logger = logging.getLogger(__name__)

# Well-known merchants, checked as substrings before anything learned
MERCHANT_CATEGORIES: dict[str, str] = {
    "swiggy": "Food & Dining",
    "zomato": "Food & Dining",
    "uber": "Transport",
    "ola": "Transport",
    "amazon": "Shopping",
    "flipkart": "Shopping",
    "netflix": "Entertainment",
    "jio": "Bills & Utilities",
    "airtel": "Bills & Utilities",
}

KEYWORD_CONFIDENCE = 0.9
LEARNED_CONFIDENCE = 0.8
DEFAULT_CONFIDENCE = 0.1


class CategoryClassifier(Observable):
    """Three-tier category prediction: keyword dictionary, learned mapping, default.

    The learned model is loaded once when the classifier is created and kept
    in memory; learn() writes through to the database before touching the
    in-memory copy, so a failed write leaves the session state unchanged.
    """

    def __init__(self, db: Database):
        """Initialize the classifier and load the learned model.

        Args:
            db: Database instance
        """
        super().__init__()
        self.db = db
        self._mappings: dict[str, str] = {}
        self._frequencies: dict[str, int] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read the learned model. Unreadable storage reads as empty."""
        try:
            model = self.db.get_classifier_model()
        except PersistenceError as e:
            logger.warning("Classifier model unavailable, starting empty: %s", e)
            model = ClassifierModel()
        self._mappings = dict(model.mappings)
        self._frequencies = dict(model.frequencies)

    @property
    def model(self) -> ClassifierModel:
        """Snapshot of the learned state."""
        return ClassifierModel(
            mappings=dict(self._mappings), frequencies=dict(self._frequencies)
        )

    def predict(self, description: Optional[str], amount: Optional[Decimal] = None) -> CategoryPrediction:
        """Predict a category for a transaction description.

        Never raises; empty or unknown descriptions get the default prediction.

        Args:
            description: Merchant or description text
            amount: Transaction amount (currently unused by every tier)

        Returns:
            CategoryPrediction with confidence 0.9 (keyword), 0.8 (learned) or 0.1 (default)
        """
        if not description or not isinstance(description, str):
            return CategoryPrediction(DEFAULT_CATEGORY, DEFAULT_CONFIDENCE)

        desc = description.lower()

        for keyword, category in MERCHANT_CATEGORIES.items():
            if keyword in desc:
                return CategoryPrediction(category, KEYWORD_CONFIDENCE)

        learned = self._mappings.get(desc)
        if learned:
            return CategoryPrediction(learned, LEARNED_CONFIDENCE)

        return CategoryPrediction(DEFAULT_CATEGORY, DEFAULT_CONFIDENCE)

    def learn(self, description: str, category: str) -> None:
        """Remember the category a user chose for a description.

        Empty descriptions or categories are ignored.

        Args:
            description: Description the user categorized
            category: Category the user chose

        Raises:
            PersistenceError: If the mapping could not be saved
        """
        if not description or not category:
            return

        desc = description.lower()
        self.db.save_category_mapping(desc, category)

        self._mappings[desc] = category
        self._frequencies[category] = self._frequencies.get(category, 0) + 1
        logger.info("Learned category '%s' for '%s'", category, desc)
        self._notify(self.model)
