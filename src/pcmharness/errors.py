"""Exceptions raised while judging a trial or reading the corpus."""


class InvariantViolation(Exception):
    """A diagram or witness path broke a checked invariant."""

    def __init__(self, rule_id, message, evidence=None):
        super().__init__(message)
        self.rule_id = rule_id
        self.message = message
        self.evidence = evidence or {}
        self.stage = None


class EngineError(Exception):
    """The matching engine failed or broke its contract."""

    def __init__(self, message, stage=None):
        super().__init__(message)
        self.message = message
        self.stage = stage


class CorpusError(ValueError):
    """A corpus record could not be decoded."""
