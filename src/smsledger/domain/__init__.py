"""Domain layer for smsledger application.

Services live in their own modules (rules, bank, classifier, extraction,
account_resolution, formatter, pending, detector) and are imported from
there so the database layer can import entities without a cycle.
"""
