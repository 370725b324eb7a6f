"""Deterministic process exit-code mapping for the CLI."""

SUCCESS = 0
SUBMISSION_FAILURE = 1
USER_ERROR = 2
